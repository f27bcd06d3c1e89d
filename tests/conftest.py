import pytest

# 4x4 grid: A at (0,0) and B at (3,0), so "AB" only lines up at stride 3 going right
STRIDE3_TEXT = "AXXBXXXXXXXXXXXX"


@pytest.fixture
def stride3_text() -> str:
    return STRIDE3_TEXT


@pytest.fixture
def stride3_file(tmp_path):
    path = tmp_path / "stride3.txt"
    path.write_text(STRIDE3_TEXT, encoding="utf-8")
    return path
