"""
Tests for the command line interface
"""

import pytest

from planar_idempotents.cli import build_parser, main


class TestMain:
    def test_jones_default(self, capsys):
        assert main(["4"]) == 0
        assert capsys.readouterr().out == "12\n"

    def test_other_monoids(self, capsys):
        assert main(["-m", "kauffman", "4"]) == 0
        assert capsys.readouterr().out == "5\n"
        assert main(["--monoid", "motzkin", "2"]) == 0
        assert capsys.readouterr().out == "7\n"

    def test_verbose_threads(self, capsys):
        assert main(["-v", "--threads", "-w", "2", "3"]) == 0
        assert capsys.readouterr().out == "5\n"

    def test_help(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["-h"])
        assert exc.value.code == 0
        assert "planar-idempotents" in capsys.readouterr().out

    @pytest.mark.parametrize("argv", [["0"], ["41"], ["abc"], [], ["-w", "0", "3"], ["-m", "brauer", "3"]])
    def test_bad_arguments(self, argv, capsys):
        with pytest.raises(SystemExit) as exc:
            main(argv)
        assert exc.value.code == 2
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err


class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args(["7"])
        assert args.deg == 7
        assert args.monoid == "jones"
        assert args.workers is None
        assert not args.threads
        assert not args.verbose


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
