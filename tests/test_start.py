from datetime import date

import pytest

from satdownload.core.start import apply_overrides, build_start_request, resolve_start
from satdownload.exceptions import CounterReadError, InvalidDateError, InvalidFileNumberError
from satdownload.models.identifier import StartRequest
from satdownload.storage.counter import CounterStore

from .conftest import REFERENCE_DATE


def test_resume_after_persisted_counter(make_config, tmp_path):
    config = make_config()
    counter = CounterStore(config.counter_file)
    counter.store(42)

    start = resolve_start(StartRequest(REFERENCE_DATE), config, counter)
    assert start.sequence_number == 43
    assert start.file_name == "1234_20261019_000043.txt"


def test_resume_without_counter_starts_at_one(make_config):
    config = make_config()
    start = resolve_start(StartRequest(REFERENCE_DATE), config, CounterStore(config.counter_file))
    assert start.sequence_number == 1


def test_resume_with_corrupt_counter(make_config, tmp_path):
    config = make_config()
    (tmp_path / "satdownload.counter").write_text("garbage", encoding="utf-8")
    with pytest.raises(CounterReadError):
        resolve_start(StartRequest(REFERENCE_DATE), config, CounterStore(config.counter_file))


def test_explicit_file_number_ignores_counter(make_config):
    config = make_config()
    counter = CounterStore(config.counter_file)
    counter.store(42)
    start = resolve_start(StartRequest(REFERENCE_DATE, file_num=7), config, counter)
    assert start.file_name == "1234_20261019_000007.txt"


def test_explicit_file_name(make_config):
    config = make_config()
    request = StartRequest(REFERENCE_DATE, file_name="foo.txt")
    start = resolve_start(request, config, CounterStore(config.counter_file))
    assert start.file_name == "foo.txt"
    assert not start.is_derived


def test_file_name_disables_consecutive_mode_and_persistence(make_config):
    config = make_config(consecutive_mode=True, persist_progress=True)
    adjusted = apply_overrides(config, StartRequest(REFERENCE_DATE, file_name="foo.txt"))
    assert adjusted.consecutive_mode is False
    assert adjusted.persist_progress is False
    # The loaded configuration is left as it was.
    assert config.consecutive_mode is True


def test_file_number_disables_persistence_only(make_config):
    adjusted = apply_overrides(make_config(), StartRequest(REFERENCE_DATE, file_num=3))
    assert adjusted.consecutive_mode is True
    assert adjusted.persist_progress is False


def test_resume_keeps_configuration(make_config):
    config = make_config()
    assert apply_overrides(config, StartRequest(REFERENCE_DATE)) is config


def test_build_start_request():
    request = build_start_request("2026/10/19", file_name="'foo.txt'")
    assert request.reference_date == REFERENCE_DATE
    assert request.file_name == "foo.txt"

    today = build_start_request(None, today=date(2026, 2, 1))
    assert today.reference_date == date(2026, 2, 1)

    with pytest.raises(InvalidFileNumberError):
        build_start_request(None, file_num=-1)
    with pytest.raises(InvalidDateError):
        build_start_request("not-a-date")
