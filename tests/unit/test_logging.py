import datetime
import json
import logging
from typing import Any

import pytest

from grant_tracker.logging import JSONFormatter


class TestLogging:
    def test_basic_log_message(self, app, caplog) -> None:
        app.logger.info("this is a test log message")

        assert caplog.messages == ["this is a test log message"]

    @pytest.mark.parametrize("simple", ["hello", 1, 1.0, True, None])
    def test_can_log_simple_interpolated_values(self, app, caplog, simple: Any) -> None:
        app.logger.info("this is a test log %(simple)s", {"simple": simple})

        assert caplog.messages == [f"this is a test log {simple}"]

    @pytest.mark.parametrize("complex", [[1, 2, 3], (1, 2, 3), {"a": "b"}, {"a"}, frozenset({"a"}), object(), b"bytes"])
    def test_cannot_log_complex_data_types(self, app, caplog, complex: Any) -> None:
        with pytest.raises(ValueError) as exc:
            app.logger.info("this is a test log %(complex)s", {"complex": complex})

        assert str(exc.value) == f"Attempt to log data type `{type(complex)}` rejected by security policy."

    def test_can_log_date(self, app, caplog) -> None:
        app.logger.info("this is a test log %(date)s", {"date": datetime.date(2023, 6, 30)})

        assert caplog.messages == ["this is a test log 2023-06-30"]

    def test_can_log_datetime(self, app, caplog) -> None:
        app.logger.info("this is a test log %(datetime)s", {"datetime": datetime.datetime(2023, 6, 30, 14, 30, 45)})

        assert caplog.messages == ["this is a test log 2023-06-30 14:30:45"]


class TestJSONFormatter:
    def test_renames_and_tags_fields(self) -> None:
        formatter = JSONFormatter("%(asctime)s %(levelname)s %(message)s")
        record = logging.LogRecord(
            "grant_tracker", logging.INFO, __file__, 1, "Created client %(client_id)s", ({"client_id": "abc"},), None
        )

        output = json.loads(formatter.format(record))

        assert output["message"] == "Created client abc"
        assert output["levelname"] == "INFO"
        assert output["logType"] == "application"
        assert "time" in output
        assert "asctime" not in output
