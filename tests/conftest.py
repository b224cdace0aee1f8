import pytest


@pytest.fixture
def font_file(tmp_path):
    """An existing file the fake rasterizer can "load"."""
    path = tmp_path / "Fake.ttf"
    path.write_bytes(b"fake font")
    return str(path.resolve())
