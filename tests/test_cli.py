import logging

import pytest

from src_bundle.cli import build_parser, main, settings_from_args


def test_main_with_base_dir(demo_project, expected_output):
    assert main(["--base-dir", str(demo_project)]) == 0
    assert (demo_project / "out.rs").read_text(encoding="utf-8") == expected_output


def test_main_uses_script_directory(demo_project, tmp_path, monkeypatch, expected_output):
    script = demo_project / "publish.py"
    script.write_text("", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    assert main([], script_path=str(script)) == 0
    assert (demo_project / "out.rs").read_text(encoding="utf-8") == expected_output


def test_main_defaults_to_current_directory(demo_project, monkeypatch):
    monkeypatch.chdir(demo_project)
    assert main(["-q"]) == 0
    assert (demo_project / "out.rs").exists()


def test_main_missing_manifest_exit_code(demo_project, caplog):
    (demo_project / "Cargo.toml").unlink()

    with caplog.at_level(logging.ERROR):
        assert main(["--base-dir", str(demo_project)]) == 4

    assert "Cargo.toml" in caplog.text
    assert not (demo_project / "out.rs").exists()


def test_main_bad_base_dir_exit_code(tmp_path):
    assert main(["--base-dir", str(tmp_path / "missing")]) == 3


def test_main_unwritable_output_exit_code(demo_project):
    assert main(["--base-dir", str(demo_project), "--output", "missing/out.rs"]) == 5


def test_main_custom_marker_and_extension(tmp_path, make_file):
    make_file(tmp_path, "demo.nimble", "version = \"0.1\"\n")
    make_file(tmp_path, "lib/demo.nim", "echo 1\n")

    code = main([
        "--base-dir", str(tmp_path),
        "--manifest", "demo.nimble",
        "--source-dir", "lib",
        "--extension", "nim",
        "--output", "bundle.nim",
        "--comment-marker", "#",
    ])

    assert code == 0
    assert (tmp_path / "bundle.nim").read_text(encoding="utf-8") == (
        "# demo.nimble\n# version = \"0.1\"\n\n# lib/demo.nim\necho 1\n"
    )


def test_parser_defaults():
    settings = settings_from_args(build_parser().parse_args([]))
    assert settings.manifest == "Cargo.toml"
    assert settings.source_dir == "src"
    assert settings.extension == ".rs"
    assert settings.output == "out.rs"
    assert settings.comment_marker == "//"
    assert settings.include_hidden is False


@pytest.mark.parametrize("argv", [
    ["--comment-marker", ""],
    ["--extension", ""],
    ["-v", "-q"],
])
def test_parser_rejects_bad_options(argv):
    with pytest.raises(SystemExit) as excinfo:
        build_parser().parse_args(argv)
    assert excinfo.value.code == 2
