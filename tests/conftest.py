# tests/conftest.py
import pytest

@pytest.fixture(autouse=True)
def _isolated_data_dir(tmp_path, monkeypatch):
    # ledgers land in tmp, never in ~/.shopcart
    monkeypatch.setenv("SHOPCART_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("SHOPCART_DEBUG", raising=False)
    monkeypatch.delenv("SHOPCART_CATALOG", raising=False)
    yield tmp_path / "data"
