import pytest

from buf_edit.runtime import telemetry


def test_configure_rejects_config_and_preset_together() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=object(), preset="development")


def test_configure_rejects_unknown_preset() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(preset="verbose")


def test_record_event_rejects_unknown_level() -> None:
    with pytest.raises(ValueError):
        telemetry.record_event("buffer.test", level="shout")


def test_span_reraises_block_errors() -> None:
    with pytest.raises(RuntimeError):
        with telemetry.span("test::span", metadata={"case": "error"}):
            raise RuntimeError("boom")
