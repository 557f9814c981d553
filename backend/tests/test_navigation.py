from dashboard.navigation import sidebar_data


def test_sidebar_group_and_item_order():
    assert [g.title for g in sidebar_data.nav_groups] == ["General", "Pages", "Other"]
    general = sidebar_data.nav_groups[0]
    assert [i.title for i in general.items] == ["Dashboard", "Companies", "Apps", "Chats", "Users"]
    errors = sidebar_data.nav_groups[1].items[1]
    assert errors.title == "Errors"
    assert [(i.title, i.url) for i in errors.items] == [
        ("Unauthorized", "/401"),
        ("Forbidden", "/403"),
        ("Not Found", "/404"),
        ("Internal Server Error", "/500"),
        ("Maintenance Error", "/503"),
    ]


def test_sidebar_endpoint_shape(client):
    r = client.get("/navigation/sidebar")
    assert r.status_code == 200
    data = r.json()
    assert set(data) == {"user", "teams", "navGroups"}
    assert [t["name"] for t in data["teams"]] == ["Shadcn Admin", "Acme Inc", "Acme Corp."]

    general = data["navGroups"][0]["items"]
    assert general[1] == {"title": "Companies", "url": "/companies", "icon": "Building2"}
    assert general[3]["badge"] == "3"
    assert "badge" not in general[0]

    auth = data["navGroups"][1]["items"][0]
    assert auth["title"] == "Auth"
    assert "url" not in auth
    assert auth["items"][0] == {"title": "Sign In", "url": "/sign-in"}
