from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, NoReturn, Optional, Sequence

from ghmustache.core.config import ParserConfig, RenderConfig
from ghmustache.core.errors import GhMustacheError, TemplateSyntaxError
from ghmustache.core.value import ObjectValue, StringValue, Value
from ghmustache.logging.factory import DefaultLoggerFactory
from ghmustache.logging.helpers import get_logger
from ghmustache.rendering.loaders import DirectoryTemplateLoader
from ghmustache.template import Template

logger = get_logger('ghmustache')

EXIT_RENDER_ERROR = 1
EXIT_INVALID_TEMPLATE = 2


def _configure_logging(enable_json: bool, verbose: bool = False) -> None:
    """Configure process-wide logging once, either JSON or plain text."""
    mode = (bool(enable_json), bool(verbose))
    if getattr(_configure_logging, '_configured_mode', None) == mode:
        return
    factory = DefaultLoggerFactory.from_env(json_logs=enable_json, verbose=verbose)
    global logger
    logger = factory.get_logger('ghmustache')
    setattr(_configure_logging, '_configured_mode', mode)


def _fatal(msg: str, code: int = EXIT_RENDER_ERROR) -> NoReturn:
    """Exit the process with a logged error."""
    logger.error(msg)
    sys.exit(code)


def _positive_int(raw: str) -> int:
    """argparse type for limits: an integer >= 1."""
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f'invalid integer: {raw!r}') from None
    if value < 1:
        raise argparse.ArgumentTypeError(f'must be >= 1, got {value}')
    return value


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    p = argparse.ArgumentParser(
        prog='ghmustache',
        formatter_class=argparse.RawTextHelpFormatter,
        description=(
            'ghmustache – logic-less {{mustache}} template renderer\n'
            'Renders TEMPLATE against JSON data and writes the result to STDOUT '
            'unless -o is given.'
        ),
    )
    g_in = p.add_argument_group('Input')
    g_out = p.add_argument_group('Output')
    g_lim = p.add_argument_group('Limits')
    g_misc = p.add_argument_group('Miscellaneous')

    g_in.add_argument(
        'template',
        metavar='TEMPLATE',
        help="Template file to render ('-' reads STDIN).",
    )
    g_in.add_argument(
        '-d',
        '--data',
        metavar='FILE',
        dest='data',
        help=(
            "JSON file providing the root value ('-' reads STDIN). Objects, arrays, "
            'strings and booleans map directly; null renders as false and numbers '
            'as their text.'
        ),
    )
    g_in.add_argument(
        '-e',
        '--env',
        metavar='VAR=VAL',
        action='append',
        dest='env_vars',
        help=(
            'Define a top-level string variable. Repeatable. Values given here '
            'take precedence over keys of the same name in --data.'
        ),
    )
    g_in.add_argument(
        '-p',
        '--partials',
        metavar='DIR',
        dest='partials_dir',
        help='Directory holding partial templates referenced as {{> name}}.',
    )
    g_in.add_argument(
        '--partial-suffix',
        metavar='SUF',
        dest='partial_suffix',
        default='.mustache',
        help="File suffix appended to partial names (default: '.mustache').",
    )

    g_out.add_argument(
        '-o',
        '--output',
        metavar='FILE',
        dest='output',
        help='Write the rendered text to FILE instead of STDOUT.',
    )
    g_out.add_argument(
        '--print-tree',
        action='store_true',
        dest='print_tree',
        help='Print the parsed tag tree instead of rendering.',
    )
    g_out.add_argument(
        '--no-escape',
        action='store_true',
        dest='no_escape',
        help='Do not HTML-escape {{name}} output.',
    )

    g_lim.add_argument(
        '--max-nesting',
        metavar='N',
        type=_positive_int,
        dest='max_nesting',
        help='Maximum section nesting accepted by the parser (default: GHMUSTACHE_MAX_NESTING or 100).',
    )
    g_lim.add_argument(
        '--max-depth',
        metavar='N',
        type=_positive_int,
        dest='max_depth',
        help='Maximum combined section and partial depth while rendering.',
    )
    g_lim.add_argument(
        '--max-partial-depth',
        metavar='N',
        type=_positive_int,
        dest='max_partial_depth',
        help='Maximum nested partial inclusions while rendering.',
    )

    g_misc.add_argument(
        '--json-logs',
        action='store_true',
        dest='json_logs',
        help='Emit logs in JSON format instead of plain text.',
    )
    g_misc.add_argument(
        '-v',
        '--verbose',
        action='store_true',
        help='Enable debug logging.',
    )
    return p


def _read_text(ref: str) -> str:
    if ref == '-':
        return sys.stdin.read()
    pth = Path(ref).expanduser()
    if not pth.is_file():
        _fatal(f'file {ref} not found')
    return pth.read_text(encoding='utf-8')


def _parse_env_items(items: Optional[List[str]]) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for item in items or []:
        if '=' not in item:
            _fatal(f'invalid --env item {item!r} (expected VAR=VAL)')
        key, val = item.split('=', 1)
        out[key.strip()] = val
    return out


def _load_data(ns: argparse.Namespace) -> Value:
    """Build the root value from --data and --env."""
    data: Any = {}
    if ns.data:
        raw = _read_text(ns.data)
        try:
            data = json.loads(raw) if raw.strip() else {}
        except json.JSONDecodeError as exc:
            _fatal(f'invalid JSON in {ns.data}: {exc}')

    root = Value.from_python(data)
    env = _parse_env_items(ns.env_vars)
    if not env:
        return root
    if not isinstance(root, ObjectValue):
        _fatal('--env requires the --data root to be a JSON object')

    merged = ObjectValue()
    for key, val in env.items():
        merged.set(key, StringValue(val))
    for key, val in root.fields.items():
        merged.set(key, val)
    return merged


def _render_config(ns: argparse.Namespace) -> RenderConfig:
    base = RenderConfig.from_env()
    return RenderConfig(
        max_depth=base.max_depth if ns.max_depth is None else ns.max_depth,
        max_partial_depth=base.max_partial_depth if ns.max_partial_depth is None else ns.max_partial_depth,
        escape=not ns.no_escape,
    )


class GhMustache:
    """Top-level façade for command-style execution."""

    @staticmethod
    def run(argv: Sequence[str]) -> str:
        """Run the tool with an argv-like sequence and return the final text."""
        ns = _build_parser().parse_args(list(argv))
        _configure_logging(ns.json_logs, ns.verbose)

        parser_cfg = ParserConfig.from_env()
        if ns.max_nesting is not None:
            parser_cfg = ParserConfig(max_nesting=ns.max_nesting)

        source = _read_text(ns.template)
        name = None if ns.template == '-' else ns.template
        tpl = Template(source, name=name, config=parser_cfg, logger=get_logger('parser'))
        if not tpl.is_valid:
            raise tpl.error

        if ns.print_tree:
            result = tpl.dump()
        else:
            loader = None
            if ns.partials_dir:
                loader = DirectoryTemplateLoader(ns.partials_dir, suffix=ns.partial_suffix)
            result = tpl.render(_load_data(ns), loader=loader, config=_render_config(ns))

        if ns.output:
            out = Path(ns.output).expanduser()
            out.parent.mkdir(parents=True, exist_ok=True)
            out.write_text(result, encoding='utf-8')
            logger.info('✔ rendered %s → %s', name or '<stdin>', out)
        else:
            sys.stdout.write(result)
        return result


def main(argv: Optional[Sequence[str]] = None) -> NoReturn:
    """Entry point for the `ghmustache` script and `python -m ghmustache`."""
    try:
        GhMustache.run(sys.argv[1:] if argv is None else argv)
        raise SystemExit(0)
    except KeyboardInterrupt:
        logger.error('Interrupted by user.')
        raise SystemExit(130)
    except BrokenPipeError:
        raise SystemExit(0)
    except TemplateSyntaxError as exc:
        logger.error('invalid template: %s', exc)
        raise SystemExit(EXIT_INVALID_TEMPLATE)
    except GhMustacheError as exc:
        if os.getenv('DEBUG') == '1':
            raise
        logger.error('render failed: %s', exc)
        raise SystemExit(EXIT_RENDER_ERROR)


if __name__ == '__main__':
    main()
