from .conftest import PASSPHRASE

AUTH = {"type": "presenter_auth", "passphrase": PASSPHRASE}
PING = {"type": "ping"}


def sync(ws):
    """Block until every frame sent on ``ws`` so far has been handled."""
    ws.send_json(PING)
    assert ws.receive_json() == {"type": "pong"}


def test_presenter_viewer_walkthrough(client):
    with client.websocket_connect("/ws") as a:
        a.send_json(AUTH)
        assert a.receive_json() == {"type": "auth_success", "message": "Presenter authenticated successfully"}

        with client.websocket_connect("/ws") as b:
            b.send_json(AUTH)
            assert b.receive_json() == {"type": "auth_error", "message": "Another presenter is already connected"}

        a.send_json({"type": "set_pdf", "pdfUrl": "/uploads/doc.pdf"})
        sync(a)

        with client.websocket_connect("/ws") as c:
            c.send_json({"type": "viewer_join"})
            assert c.receive_json() == {"type": "pdf_update", "pdfUrl": "/uploads/doc.pdf", "currentPage": 1}

            a.send_json({"type": "page_change", "page": 5})
            assert c.receive_json() == {"type": "page_update", "currentPage": 5}

            a.send_json({"type": "set_pdf", "pdfUrl": "/uploads/next.pdf"})
            assert c.receive_json() == {"type": "pdf_update", "pdfUrl": "/uploads/next.pdf", "currentPage": 1}

            health = client.get("/api/health").json()
            assert health == {
                "status": "ok",
                "presenter": True,
                "viewers": 1,
                "pdfUrl": "/uploads/next.pdf",
                "currentPage": 1,
            }


def test_wrong_passphrase_is_rejected(client):
    with client.websocket_connect("/ws") as ws:
        ws.send_json({"type": "presenter_auth", "passphrase": "guess"})
        assert ws.receive_json() == {"type": "auth_error", "message": "Invalid passphrase"}
        ws.send_json({"type": "presenter_auth"})
        assert ws.receive_json() == {"type": "auth_error", "message": "Invalid passphrase"}


def test_viewer_cannot_mutate_or_promote(client):
    with client.websocket_connect("/ws") as ws:
        ws.send_json({"type": "viewer_join"})
        ws.send_json({"type": "set_pdf", "pdfUrl": "/uploads/x.pdf"})
        assert ws.receive_json() == {"type": "error", "message": "Unauthorized: Only presenter can set PDF"}
        ws.send_json({"type": "page_change", "page": 2})
        assert ws.receive_json() == {"type": "error", "message": "Unauthorized: Only presenter can change pages"}
        ws.send_json(AUTH)
        assert ws.receive_json() == {"type": "auth_error", "message": "Viewers cannot become the presenter"}

    assert client.get("/api/health").json()["pdfUrl"] is None


def test_unauthenticated_mutation_is_denied(client):
    with client.websocket_connect("/ws") as ws:
        ws.send_json({"type": "page_change", "page": 3})
        assert ws.receive_json()["type"] == "error"
    assert client.get("/api/health").json()["currentPage"] == 1


def test_malformed_frames_get_error_and_keep_connection(client):
    with client.websocket_connect("/ws") as ws:
        ws.send_text("{not json")
        assert ws.receive_json() == {"type": "error", "message": "Invalid JSON"}
        ws.send_text("[1, 2]")
        assert ws.receive_json() == {"type": "error", "message": "Messages must be JSON objects"}
        ws.send_json({"type": "dance"})
        assert ws.receive_json() == {"type": "error", "message": "Unknown event type: 'dance'"}

        ws.send_json(AUTH)
        assert ws.receive_json()["type"] == "auth_success"
        for bad in ({"type": "page_change", "page": 0}, {"type": "page_change", "page": "2"}, {"type": "set_pdf"}):
            ws.send_json(bad)
            assert ws.receive_json() == {"type": "error", "message": f"Invalid payload for {bad['type']}"}
        sync(ws)

    assert client.get("/api/health").json()["currentPage"] == 1


def test_non_string_passphrase_is_an_auth_error(client):
    with client.websocket_connect("/ws") as ws:
        ws.send_json({"type": "presenter_auth", "passphrase": 123456})
        assert ws.receive_json() == {"type": "auth_error", "message": "Invalid passphrase"}
        ws.send_json({"type": "presenter_auth", "passphrase": {"value": PASSPHRASE}})
        assert ws.receive_json() == {"type": "auth_error", "message": "Invalid passphrase"}
    assert client.get("/api/health").json()["presenter"] is False


def test_late_viewer_gets_latest_page(client):
    with client.websocket_connect("/ws") as host:
        host.send_json(AUTH)
        assert host.receive_json()["type"] == "auth_success"
        host.send_json({"type": "set_pdf", "pdfUrl": "/uploads/doc.pdf"})
        host.send_json({"type": "page_change", "page": 7})
        sync(host)

        with client.websocket_connect("/ws") as late:
            late.send_json({"type": "viewer_join"})
            assert late.receive_json() == {"type": "pdf_update", "pdfUrl": "/uploads/doc.pdf", "currentPage": 7}
