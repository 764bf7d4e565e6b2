from __future__ import annotations

import contextlib
import io
import json
import sys
import tempfile
import unittest
from pathlib import Path
from typing import Iterator
from unittest.mock import patch

from ghmustache import TemplateSyntaxError
from ghmustache.cli import GhMustache, main


@contextlib.contextmanager
def _workdir() -> Iterator[Path]:
    with tempfile.TemporaryDirectory() as td:
        yield Path(td)


def _write(path: Path, body: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(body, encoding="utf-8")
    return path


class CliRunTests(unittest.TestCase):
    def test_render_to_stdout(self) -> None:
        with _workdir() as wd:
            tpl = _write(wd / "t.mustache", "Hi {{name}}{{#admin}} (admin){{/admin}}")
            data = _write(wd / "d.json", json.dumps({"name": "Ann", "admin": True}))
            buf = io.StringIO()
            with contextlib.redirect_stdout(buf):
                out = GhMustache.run([str(tpl), "-d", str(data)])
            self.assertEqual(out, "Hi Ann (admin)")
            self.assertEqual(buf.getvalue(), out)

    def test_render_to_output_file_with_partials(self) -> None:
        with _workdir() as wd:
            tpl = _write(wd / "page.mustache", "{{#rows}}{{> row}}{{/rows}}")
            _write(wd / "parts" / "row.mustache", "<li>{{v}}</li>")
            data = _write(wd / "d.json", json.dumps({"rows": [{"v": "1"}, {"v": "<2>"}]}))
            out_file = wd / "build" / "page.html"
            GhMustache.run([str(tpl), "-d", str(data), "-p", str(wd / "parts"), "-o", str(out_file)])
            self.assertEqual(out_file.read_text(encoding="utf-8"), "<li>1</li><li>&lt;2&gt;</li>")

    def test_env_values_override_data(self) -> None:
        with _workdir() as wd:
            tpl = _write(wd / "t.mustache", "{{a}}-{{b}}")
            data = _write(wd / "d.json", json.dumps({"a": "data", "b": "kept"}))
            with contextlib.redirect_stdout(io.StringIO()):
                out = GhMustache.run([str(tpl), "-d", str(data), "-e", "a=env"])
            self.assertEqual(out, "env-kept")

    def test_no_escape_flag(self) -> None:
        with _workdir() as wd:
            tpl = _write(wd / "t.mustache", "{{v}}")
            with contextlib.redirect_stdout(io.StringIO()):
                out = GhMustache.run([str(tpl), "-e", "v=<b>", "--no-escape"])
            self.assertEqual(out, "<b>")

    def test_print_tree(self) -> None:
        with _workdir() as wd:
            tpl = _write(wd / "t.mustache", "{{#s}}x{{/s}}")
            with contextlib.redirect_stdout(io.StringIO()):
                out = GhMustache.run([str(tpl), "--print-tree"])
            self.assertEqual(out, "TAG: {{s}}\n TXT: x\n")

    def test_invalid_template_raises(self) -> None:
        with _workdir() as wd:
            tpl = _write(wd / "t.mustache", "{{/x}}")
            with self.assertRaises(TemplateSyntaxError):
                GhMustache.run([str(tpl)])


class CliMainTests(unittest.TestCase):
    def test_exit_codes(self) -> None:
        with _workdir() as wd:
            good = _write(wd / "good.mustache", "ok")
            bad = _write(wd / "bad.mustache", "{{#x}}")
            missing_partial = _write(wd / "mp.mustache", "{{> gone}}")

            with contextlib.redirect_stdout(io.StringIO()):
                with self.assertRaises(SystemExit) as cm:
                    main([str(good)])
            self.assertEqual(cm.exception.code, 0)

            with self.assertRaises(SystemExit) as cm:
                main([str(bad)])
            self.assertEqual(cm.exception.code, 2)

            with self.assertRaises(SystemExit) as cm:
                main([str(missing_partial), "-p", str(wd)])
            self.assertEqual(cm.exception.code, 1)

    def test_limits_must_be_positive(self) -> None:
        with _workdir() as wd:
            tpl = _write(wd / "t.mustache", "x")
            for flag in ("--max-depth", "--max-partial-depth", "--max-nesting"):
                for bad in ("0", "-3", "many"):
                    with contextlib.redirect_stderr(io.StringIO()):
                        with self.assertRaises(SystemExit) as cm:
                            main([str(tpl), flag, bad])
                    self.assertEqual(cm.exception.code, 2, (flag, bad))

    def test_explicit_limit_overrides_environment(self) -> None:
        with _workdir() as wd:
            tpl = _write(wd / "t.mustache", "{{#a}}{{#a}}x{{/a}}{{/a}}")
            with patch.dict("os.environ", {"GHMUSTACHE_MAX_DEPTH": "1"}):
                with contextlib.redirect_stdout(io.StringIO()):
                    out = GhMustache.run([str(tpl), "-e", "a=1", "--max-depth", "2"])
            self.assertEqual(out, "x")

    def test_unreadable_partial_exits_with_render_error(self) -> None:
        with _workdir() as wd:
            tpl = _write(wd / "t.mustache", "{{> bin}}")
            (wd / "bin.mustache").write_bytes(b"\xff\xfe\x00broken")
            with self.assertRaises(SystemExit) as cm:
                main([str(tpl), "-p", str(wd)])
            self.assertEqual(cm.exception.code, 1)

    def test_depth_beyond_interpreter_stack_exits_with_render_error(self) -> None:
        n = 300
        with _workdir() as wd:
            tpl = _write(wd / "t.mustache", "{{#a}}" * n + "{{/a}}" * n)
            saved = sys.getrecursionlimit()
            sys.setrecursionlimit(1000)
            try:
                with self.assertRaises(SystemExit) as cm:
                    main([str(tpl), "-e", "a=1", "--max-nesting", str(n), "--max-depth", str(n)])
            finally:
                sys.setrecursionlimit(saved)
            self.assertEqual(cm.exception.code, 1)

    def test_missing_template_file(self) -> None:
        with _workdir() as wd:
            with self.assertRaises(SystemExit) as cm:
                main([str(wd / "nope.mustache")])
            self.assertEqual(cm.exception.code, 1)

    def test_invalid_json(self) -> None:
        with _workdir() as wd:
            tpl = _write(wd / "t.mustache", "x")
            data = _write(wd / "d.json", "{not json")
            with self.assertRaises(SystemExit) as cm:
                main([str(tpl), "-d", str(data)])
            self.assertEqual(cm.exception.code, 1)


if __name__ == "__main__":
    unittest.main()
