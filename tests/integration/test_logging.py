import logging


class TestRequestLogging:
    def test_completed_request_is_logged(self, admin_client, caplog):
        admin_client.get("/api/clients")

        [record] = [record for record in caplog.records if getattr(record, "status", None) is not None]
        assert record.levelno == logging.INFO
        assert record.status == 200
        assert record.method == "GET"
        assert record.endpoint == "api.list_clients"
        assert record.getMessage().startswith("200 GET http://localhost/api/clients - [real:")

    def test_request_start_is_logged_at_debug(self, anonymous_client, caplog):
        with caplog.at_level(logging.DEBUG, logger="grant_tracker"):
            anonymous_client.get("/")

        assert "--- GET http://localhost/" in caplog.messages

    def test_failed_auth_is_logged_with_its_status(self, anonymous_client, caplog):
        anonymous_client.get("/api/clients")

        assert any(message.startswith("401 GET http://localhost/api/clients") for message in caplog.messages)

    def test_request_body_is_not_logged(self, admin_client, caplog):
        admin_client.post("/api/clients", json={"name": "Client", "email": "private@example.com"})

        assert "private@example.com" not in caplog.text

    def test_ids_from_the_url_are_logged(self, admin_client, caplog):
        admin_client.put("/api/clients/abc123/grants", json={"grants": []})
        admin_client.put("/api/grants/def456", json={"name": "Renamed"})

        replace_record, update_record = [record for record in caplog.records if hasattr(record, "status")]
        assert replace_record.client_id == "abc123"
        assert not hasattr(replace_record, "grant_id")
        assert update_record.grant_id == "def456"
        assert not hasattr(update_record, "client_id")

    def test_records_without_ids_in_the_url(self, admin_client, caplog):
        admin_client.get("/api/clients")

        [record] = [record for record in caplog.records if getattr(record, "status", None) is not None]
        assert not hasattr(record, "client_id")
        assert not hasattr(record, "grant_id")
