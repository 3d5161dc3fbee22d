"""Sample data tests."""

import json
import os

import pytest

from toon_convert import builtin_samples, load_samples
from toon_convert.samples import PACK_DIR, demo_payload, example_conversions, find_pack, large_dataset, sample_title


def test_builtin_sample_names():
    assert list(builtin_samples()) == [
        "userList", "order", "apiResponse", "config", "company", "largeDataset",
    ]


def test_builtin_samples_are_fresh():
    a = builtin_samples(seed=1)
    b = builtin_samples(seed=1)
    assert a == b
    a["userList"]["users"].clear()
    assert b["userList"]["users"]


def test_large_dataset():
    records = large_dataset(seed=3)["records"]
    assert len(records) == 100
    assert records[0]["username"] == "user1"
    assert records[0]["subscribed"] is True
    assert records[1]["subscribed"] is False
    assert records[5]["country"] == "USA"
    assert records[29]["lastLogin"] == "2024-01-30"
    assert records[30]["lastLogin"] == "2024-01-01"
    assert all(0 <= r["score"] < 1000 for r in records)
    assert large_dataset(seed=3) == large_dataset(seed=3)
    assert len(large_dataset(size=5)["records"]) == 5


def test_sample_title():
    assert sample_title("userList") == "User List"
    assert sample_title("largeDataset") == "Large Dataset"
    assert sample_title("order") == "Order"


def test_demo_and_examples():
    assert len(demo_payload()["data"]["users"]) == 5
    titles = [title for title, _ in example_conversions()]
    assert titles == ["Simple User List", "Nested Configuration", "Mixed Data Types"]


def test_load_samples_by_path(tmp_path):
    path = tmp_path / "extra.json"
    path.write_text(json.dumps({"tiny": {"a": 1}, "list": [1, 2]}), encoding="utf-8")
    samples = load_samples(str(path))
    assert list(samples) == ["tiny", "list"]


def test_load_samples_by_name(tmp_path):
    (tmp_path / "mine.json").write_text('{"x": {"y": true}}', encoding="utf-8")
    assert load_samples("mine", search_dirs=[str(tmp_path)]) == {"x": {"y": True}}


def test_bundled_pack():
    samples = load_samples("inventory")
    assert "warehouseStock" in samples
    assert len(samples["warehouseStock"]["items"]) == 4


def test_bundled_pack_ships_inside_the_package():
    assert os.path.isfile(os.path.join(PACK_DIR, "inventory.json"))
    assert find_pack("inventory").startswith(PACK_DIR)


def test_working_directory_pack_comes_first(tmp_path, monkeypatch):
    (tmp_path / "sample_packs").mkdir()
    (tmp_path / "sample_packs" / "inventory.json").write_text('{"local": 1}', encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    assert load_samples("inventory") == {"local": 1}


def test_name_with_json_suffix(tmp_path):
    (tmp_path / "mine.json").write_text('{"x": 1}', encoding="utf-8")
    assert load_samples("mine.json", search_dirs=[str(tmp_path)]) == {"x": 1}


def test_missing_pack(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_samples("nope", search_dirs=[str(tmp_path)])


def test_pack_must_be_an_object(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_samples(str(path))
