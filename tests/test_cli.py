"""
Tests for the command-line interface: argument parsing, exit codes and
output formats.
"""
import re

import pytest

from imgcomp import cli
from imgcomp.cli import CLIApplication
from imgcomp.core.models import HashAlgorithm


def run_cli(argv):
    """Run the CLI and return its exit code (0 when it returns normally)."""
    try:
        CLIApplication().run(argv)
    except SystemExit as e:
        return e.code
    return 0


class TestArgumentParsing:

    def test_defaults(self):
        app = CLIApplication()
        args = app.parse_args(["a.png"])
        params = app.create_params(args)
        assert params.algorithm == HashAlgorithm.DIFFERENCE
        assert params.tolerance == 5
        assert params.print_hashes is False

    @pytest.mark.parametrize("argv,expected", [
        (["-a"], HashAlgorithm.AVERAGE),
        (["-d"], HashAlgorithm.DIFFERENCE),
        (["-p"], HashAlgorithm.PERCEPTUAL),
        (["--algorithm", "ahash"], HashAlgorithm.AVERAGE),
        (["--algorithm", "perceptual"], HashAlgorithm.PERCEPTUAL),
        (["-a", "-p"], HashAlgorithm.PERCEPTUAL),
        (["-p", "-a"], HashAlgorithm.AVERAGE),
    ])
    def test_algorithm_selection_last_wins(self, argv, expected):
        app = CLIApplication()
        params = app.create_params(app.parse_args(argv + ["a.png"]))
        assert params.algorithm == expected

    @pytest.mark.parametrize("value,expected", [("0", 0), ("12", 12), ("64", 64)])
    def test_valid_tolerance(self, value, expected):
        app = CLIApplication()
        params = app.create_params(app.parse_args(["-t", value, "a.png"]))
        assert params.tolerance == expected

    @pytest.mark.parametrize("value", ["05", "+5", "5x", "65", "-1", "", " 5", "abc", "5\n"])
    def test_invalid_tolerance_exits_1(self, value, capsys):
        assert run_cli(["-t", value, "a.png"]) == 1
        assert "Invalid use of --tolerance" in capsys.readouterr().err

    def test_invalid_tolerance_rejected_before_files_are_read(self, capsys):
        assert run_cli(["-t", "65"]) == 1

    def test_unknown_option_exits_1(self, capsys):
        assert run_cli(["--bogus", "a.png"]) == 1
        assert "ERROR:" in capsys.readouterr().err

    def test_missing_tolerance_value_exits_1(self, capsys):
        assert run_cli(["-t"]) == 1

    def test_help_exits_0(self, capsys):
        assert run_cli(["-h"]) == 0
        out = capsys.readouterr().out
        assert "--tolerance" in out
        assert "--show-hashes" in out

    def test_no_files_prints_usage_and_exits_0(self, capsys):
        assert run_cli([]) == 0
        assert "usage:" in capsys.readouterr().out


class TestOutput:

    def test_similar_pair_line(self, test_images, capsys):
        a, b = str(test_images["gradient_a"]), str(test_images["gradient_b"])
        assert run_cli([a, b, str(test_images["vertical"])]) == 0
        out = capsys.readouterr().out
        assert out.splitlines() == [f"{a} and {b} are similar with a dist of 0"]

    def test_no_pairs_prints_nothing(self, test_images, capsys):
        assert run_cli(["-t", "0", str(test_images["gradient_a"]), str(test_images["gradient_b"])]) == 0
        assert capsys.readouterr().out == ""

    def test_show_hashes_format(self, test_images, capsys):
        paths = [str(test_images[k]) for k in ("gradient_a", "vertical", "corrupt", "document")]
        assert run_cli(["-s", "-t", "0"] + paths) == 0
        lines = capsys.readouterr().out.splitlines()

        assert len(lines) == 2
        for path, line in zip(paths, lines):
            assert re.fullmatch(re.escape(path) + r": [0-9a-f]{16}", line)

    def test_show_hashes_known_values(self, test_images, capsys):
        a, v = str(test_images["gradient_a"]), str(test_images["vertical"])
        run_cli(["-s", "-t", "0", a, v])
        assert capsys.readouterr().out.splitlines() == [
            f"{a}: ffffffffffffffff",
            f"{v}: 0000000000000000",
        ]

    def test_hashes_precede_pairs(self, test_images, capsys):
        a, b = str(test_images["gradient_a"]), str(test_images["gradient_b"])
        run_cli(["-s", a, b])
        lines = capsys.readouterr().out.splitlines()
        assert lines[0].startswith(f"{a}: ")
        assert lines[1].startswith(f"{b}: ")
        assert lines[2] == f"{a} and {b} are similar with a dist of 0"

    def test_unreadable_files_are_silently_skipped(self, test_images, temp_dir, capsys):
        paths = [str(test_images["corrupt"]), str(test_images["document"]), str(temp_dir / "missing.png")]
        assert run_cli(paths) == 0
        captured = capsys.readouterr()
        assert captured.out == ""


class TestCacheErrors:

    def test_cache_home_is_a_file(self, test_images, temp_dir, monkeypatch, capsys):
        blocker = temp_dir / "cache-file"
        blocker.write_text("not a directory")
        monkeypatch.setenv("XDG_CACHE_HOME", str(blocker))

        assert run_cli([str(test_images["gradient_a"])]) == 1
        assert "ERROR:" in capsys.readouterr().err

    def test_no_cache_location(self, test_images, monkeypatch, capsys):
        monkeypatch.delenv("XDG_CACHE_HOME", raising=False)
        monkeypatch.delenv("HOME", raising=False)

        assert run_cli([str(test_images["gradient_a"])]) == 1
        assert "$HOME" in capsys.readouterr().err


class TestMain:

    def test_keyboard_interrupt_exits_130(self, monkeypatch, capsys):
        def interrupted(self, argv=None):
            raise KeyboardInterrupt

        monkeypatch.setattr(CLIApplication, "run", interrupted)
        with pytest.raises(SystemExit) as exc_info:
            cli.main()
        assert exc_info.value.code == 130
        assert "cancelled" in capsys.readouterr().err

    def test_unexpected_error_exits_1(self, monkeypatch, capsys):
        def broken(self, argv=None):
            raise RuntimeError("boom")

        monkeypatch.delenv("DEBUG", raising=False)
        monkeypatch.setattr(CLIApplication, "run", broken)
        with pytest.raises(SystemExit) as exc_info:
            cli.main()
        assert exc_info.value.code == 1
        assert "boom" in capsys.readouterr().err

    def test_debug_reraises(self, monkeypatch):
        def broken(self, argv=None):
            raise RuntimeError("boom")

        monkeypatch.setenv("DEBUG", "1")
        monkeypatch.setattr(CLIApplication, "run", broken)
        with pytest.raises(RuntimeError, match="boom"):
            cli.main()
