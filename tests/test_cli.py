from tetris_autopilot.__main__ import build_config, format_grid, parse_args


def test_defaults_match_config():
    config = build_config(parse_args([]))
    assert config.start_level == 19
    assert config.reaction_time == 15
    assert config.tap_id == 6
    assert config.warmup_frames == 90
    assert config.solver_url == "http://localhost:3000"


def test_flags_override_config():
    args = parse_args(
        ["--start-level", "18", "--reaction-time", "21", "--seed", "4", "--headless", "--max-frames", "600"]
    )
    config = build_config(args)
    assert config.start_level == 18
    assert config.reaction_time == 21
    assert config.seed == 4
    assert args.headless
    assert args.max_frames == 600


def test_format_grid():
    assert format_grid([[0, 1], [2, 0]]) == ".#\n#."
