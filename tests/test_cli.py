"""Tests for the dutree command line interface."""

import pytest

from dutreelib import __version__
from dutreelib.cli import config_from_args, create_parser, main
from dutreelib.config import KIB
from dutreelib.testing import SizedTree


@pytest.fixture
def tree():
    with SizedTree({
        "big.bin": 40000,
        "small.txt": 10,
        ".hidden": 20,
        "sub": {"inner.txt": 30},
    }) as sized:
        yield sized


@pytest.fixture(autouse=True)
def terminal(monkeypatch):
    monkeypatch.setenv("COLUMNS", "100")
    monkeypatch.delenv("LS_COLORS", raising=False)


def parse(*argv):
    args = create_parser().parse_args(list(argv))
    return args, config_from_args(args)


class TestConfigFromArgs:

    def test_defaults(self, tree, monkeypatch):
        monkeypatch.chdir(tree.root)
        args, config = parse()
        assert args.paths == ["."]
        assert config.depth.max_depth is None
        assert config.aggregate_below == 0
        assert config.physical is False
        assert config.filter.include_hidden is True
        assert config.colors == {}

    def test_summary(self, tree):
        _, config = parse("-s", str(tree.root))
        assert config.depth.max_depth == 1
        assert config.aggregate_below == KIB ** 2

    def test_depth_value(self, tree):
        _, config = parse("-d", "3", str(tree.root))
        assert config.depth.max_depth == 3

    def test_depth_takes_next_word(self, tree, monkeypatch):
        monkeypatch.chdir(tree.root)
        args, config = parse("-d", "sub")
        assert config.depth.max_depth == 1
        assert args.paths == ["."]

    def test_depth_flag_alone(self, tree):
        args, config = parse(str(tree.root), "-d")
        assert config.depth.max_depth == 1
        assert args.paths == [str(tree.root)]

    def test_aggregate_threshold(self, tree):
        _, config = parse("-a", "2K", str(tree.root))
        assert config.aggregate_below == 2 * KIB

    def test_filters_and_display(self, tree):
        _, config = parse("-H", "-f", "-b", "-u", "-A",
                          "-x", "sub", "-x", "tmp", str(tree.root))
        assert config.filter.include_hidden is False
        assert config.filter.files_only is True
        assert config.filter.exclude_names == ["sub", "tmp"]
        assert config.display.raw_bytes is True
        assert config.display.ascii_only is True
        assert config.physical is True

    def test_colors_loaded_from_environment(self, tree, monkeypatch):
        monkeypatch.setenv("LS_COLORS", "di=01;34:*.mp3=01;35")
        _, config = parse(str(tree.root))
        assert config.colors == {"di": "01;34", "*.mp3": "01;35"}

    def test_ascii_disables_colors(self, tree, monkeypatch):
        monkeypatch.setenv("LS_COLORS", "di=01;34")
        _, config = parse("-A", str(tree.root))
        assert config.colors == {}

    def test_missing_path(self, tree):
        with pytest.raises(ValueError, match="doesn't exist"):
            parse(str(tree.path("nope")))

    def test_bad_threshold(self, tree):
        with pytest.raises(ValueError, match="invalid argument '1.5M'"):
            parse("-a", "1.5M", str(tree.root))


class TestMain:

    def test_prints_tree(self, tree, capsys):
        assert main([str(tree.root)]) == 0
        lines = capsys.readouterr().out.splitlines()

        assert lines[0].startswith(f"[ {tree.root.name} ")
        assert lines[1].startswith("├─ big.bin ")
        assert all(len(line) == 100 for line in lines[1:])

    def test_summary_ascii(self, tree, capsys):
        assert main(["-s", "-A", str(tree.root)]) == 0
        out = capsys.readouterr().out

        assert "<aggregated>" in out
        assert "big.bin" not in out
        assert "\x1b[" not in out
        assert all(ord(ch) < 128 for ch in out)

    def test_hidden_excluded(self, tree, capsys):
        main(["-H", str(tree.root)])
        assert ".hidden" not in capsys.readouterr().out

    def test_several_paths(self, tree, capsys):
        main([str(tree.path("big.bin")), str(tree.path("sub"))])
        lines = capsys.readouterr().out.splitlines()
        assert lines[0].startswith("[ <collection> ")
        assert lines[1].startswith("├─ big.bin ")
        assert lines[2].startswith("└─ sub ")

    def test_missing_path_exit_status(self, tree, capsys):
        assert main([str(tree.path("nope"))]) == 1
        err = capsys.readouterr().err
        assert err.startswith("dutree: path ")
        assert "doesn't exist" in err

    def test_invalid_threshold_exit_status(self, tree, capsys):
        assert main(["-a", "1.5M", str(tree.root)]) == 1
        assert "invalid argument" in capsys.readouterr().err

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["-v"])
        assert exc.value.code == 0
        assert capsys.readouterr().out.strip() == f"dutree version {__version__}"
