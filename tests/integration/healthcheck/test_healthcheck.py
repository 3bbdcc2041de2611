def test_healthcheck(anonymous_client) -> None:
    response = anonymous_client.get("/healthcheck")
    assert response.status_code == 200
    assert response.content_type == "text/plain"
    assert response.get_data(as_text=True) == "OK"


def test_healthcheck_is_not_request_logged(anonymous_client, caplog) -> None:
    anonymous_client.get("/healthcheck")

    assert caplog.messages == []
