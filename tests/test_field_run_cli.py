import json

import pytest

from magfield.cli.field_run import build_magnet, main, parse_args
from magfield.magnet3d import Prism


def test_cli_prints_fields(capsys: pytest.CaptureFixture[str]) -> None:
    rc = main(
        [
            "--shape",
            "rectangle",
            "--size",
            "2",
            "2",
            "--center",
            "0",
            "-0.5",
            "--theta",
            "90",
            "--point",
            "0",
            "-0.5",
            "--point",
            "1",
            "0.5",
        ]
    )
    assert rc == 0
    out = json.loads(capsys.readouterr().out)
    assert out["shape"] == "rectangle"
    first, corner = out["results"]
    assert abs(first["field"][0]) < 1e-12
    assert abs(first["field"][1] - 0.5) < 1e-12
    assert not first["singular"]
    assert corner["singular"]


def test_cli_strict_mode_fails_on_corner(capsys: pytest.CaptureFixture[str]) -> None:
    rc = main(["--size", "2", "2", "--point", "1", "1", "--strict"])
    assert rc == 1
    assert capsys.readouterr().out == ""


def test_cli_rejects_wrong_size_count() -> None:
    args = parse_args(["--shape", "prism", "--size", "1", "1", "--point", "0", "0", "0"])
    with pytest.raises(ValueError):
        build_magnet(args)


def test_cli_builds_prism() -> None:
    args = parse_args(
        ["--shape", "prism", "--size", "1", "2", "3", "--theta", "90", "--point", "0", "0", "5"]
    )
    magnet = build_magnet(args)
    assert isinstance(magnet, Prism)
    assert (magnet.a, magnet.b, magnet.c) == (0.5, 1.0, 1.5)
