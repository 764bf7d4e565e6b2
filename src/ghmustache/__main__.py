from ghmustache.cli import main

main()
