"""Tests for waiverpdf.errors -- exception hierarchy."""

import pickle

import pytest

from waiverpdf.errors import ConfigError, FormatError, GenerationError, RecordError, WaiverPdfError


def test_waiverpdf_error_is_exception():
    assert issubclass(WaiverPdfError, Exception)


@pytest.mark.parametrize("cls", [FormatError, GenerationError, ConfigError, RecordError])
def test_errors_inherit_base(cls):
    assert issubclass(cls, WaiverPdfError)
    e = cls("boom")
    assert isinstance(e, WaiverPdfError)
    assert str(e) == "boom"


def test_catch_all_with_base():
    """All specific errors should be catchable via WaiverPdfError."""
    for cls in (FormatError, GenerationError, ConfigError, RecordError):
        try:
            raise cls("test")
        except WaiverPdfError:  # noqa: PERF203
            pass  # expected


def test_record_error_field_default():
    e = RecordError("missing")
    assert e.field is None


def test_record_error_pickle_roundtrip():
    """RecordError should survive pickle/unpickle with the field preserved."""
    e = RecordError("bad type", field="payload.fullName")
    restored = pickle.loads(pickle.dumps(e))
    assert isinstance(restored, RecordError)
    assert str(restored) == "bad type"
    assert restored.field == "payload.fullName"


def test_record_error_pickle_without_field():
    restored = pickle.loads(pickle.dumps(RecordError("x")))
    assert restored.field is None
