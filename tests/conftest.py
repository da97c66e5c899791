import pytest

MANIFEST = 'name = "demo"\nversion = "0.1"\n'

EXPECTED_OUTPUT = (
    "// Cargo.toml\n"
    '// name = "demo"\n'
    '// version = "0.1"\n'
    "\n"
    "// src/a.rs\n"
    "fn a(){}\n"
    "\n"
    "// src/sub/b.rs\n"
    "fn b(){}\n"
)


def write_file(root, relative, content):
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)
    return path


@pytest.fixture
def demo_project(tmp_path):
    project = tmp_path / "demo"
    write_file(project, "Cargo.toml", MANIFEST)
    write_file(project, "src/a.rs", "fn a(){}\n")
    write_file(project, "src/sub/b.rs", "fn b(){}\n")
    return project


@pytest.fixture
def expected_output():
    return EXPECTED_OUTPUT


@pytest.fixture
def make_file():
    return write_file
