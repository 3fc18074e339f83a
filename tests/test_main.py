from webtetris.__main__ import main, parse_args


def test_main_prints_one_frame(capsys):
    main(["--seed", "3"])
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 21
    frame = lines[:20]
    assert all(len(row) == 10 for row in frame)
    assert sum(row.count("@") for row in frame) == 4
    assert lines[-1] == "Score: 0  Level: 1"


def test_main_applies_gravity(capsys):
    main(["--seed", "3", "--drops", "2"])
    frame = capsys.readouterr().out.splitlines()[:20]
    assert "@" not in frame[0]


def test_parse_args_defaults():
    args = parse_args([])
    assert args.seed is None
    assert args.drops == 0
    assert not args.play
    assert args.log_level == "WARNING"
