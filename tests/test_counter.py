import pytest

from satdownload.exceptions import CounterReadError
from satdownload.storage.counter import CounterStore


def test_missing_counter_file_means_no_progress(tmp_path):
    assert CounterStore(tmp_path / "satdownload.counter").load() == 0


def test_store_then_load(tmp_path):
    store = CounterStore(tmp_path / "state" / "satdownload.counter")
    store.store(17)
    assert store.path.read_text(encoding="utf-8") == "17\n"
    assert store.load() == 17

    store.store(18)
    assert store.load() == 18


def test_load_tolerates_surrounding_whitespace(tmp_path):
    path = tmp_path / "satdownload.counter"
    path.write_text("  42\r\n", encoding="utf-8")
    assert CounterStore(path).load() == 42


@pytest.mark.parametrize("content", ["", "abc", "-3", "4.5", "²", "٣"])
def test_invalid_contents_are_fatal(tmp_path, content):
    path = tmp_path / "satdownload.counter"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(CounterReadError):
        CounterStore(path).load()


def test_unreadable_counter_is_fatal(tmp_path):
    # A directory in place of the file cannot be read as text.
    with pytest.raises(CounterReadError):
        CounterStore(tmp_path).load()


def test_negative_values_are_not_stored(tmp_path):
    with pytest.raises(ValueError):
        CounterStore(tmp_path / "c").store(-1)
