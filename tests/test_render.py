from fetchlib.render import new_document, render_error, render_joke, render_users


USERS = {
    "data": [
        {"id": 1, "first_name": "George", "last_name": "Bluth", "avatar": "https://img/1.jpg"},
        {"id": 2, "first_name": "Janet", "last_name": "Weaver", "avatar": "https://img/2.jpg"},
    ]
}


def test_render_users_one_node_per_user():
    doc = render_users(USERS)
    items = doc.select("#users-list li")
    assert len(items) == 2
    assert items[0].p.get_text() == "George Bluth"
    assert items[1].img["src"] == "https://img/2.jpg"


def test_render_users_replaces_previous_content():
    doc = render_users(USERS)
    render_users([USERS["data"][0]], doc)
    assert len(doc.select("#users-list li")) == 1


def test_render_single_user_envelope():
    doc = render_users({"data": USERS["data"][1]})
    assert doc.select_one("#users-list li p").get_text() == "Janet Weaver"


def test_render_users_ignores_empty_input():
    doc = new_document()
    before = str(doc)
    assert str(render_users(None, doc)) == before


def test_render_error():
    doc = render_error(new_document(), "Fetch failed. 500 Internal Server Error")
    assert doc.select_one("#error-message").get_text() == "Fetch failed. 500 Internal Server Error"


def test_render_joke():
    assert render_joke({"setup": "Why?", "delivery": "Because."}) == ["Why?", "Because."]
    assert render_joke({"type": "single", "joke": "Ha."}) == ["Ha."]
    assert render_joke({}) == []
