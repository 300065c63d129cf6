import io

import pytest
from PIL import Image

from hex_permutations.app import create_app, permutation_set


@pytest.fixture
def client():
    app = create_app({"TESTING": True})
    return app.test_client()


def test_index_renders_keypad(client):
    resp = client.get("/")
    assert resp.status_code == 200
    body = resp.get_data(as_text=True)
    assert "Hex Color Permutations" in body
    assert 'data-char="f"' in body
    assert 'maxlength="6"' in body


def test_palette_first_page(client):
    data = client.get("/palette?input=abcd").get_json()
    assert data["input"] == "abcd"
    assert data["capped"] is False
    assert data["count"] == 4096
    assert data["page"] == 1
    assert data["total_pages"] == 28
    assert data["start"] == 1 and data["end"] == 150
    assert data["items"][0] == {"code": "aaaaaa", "css": "#aaaaaa"}
    assert len(data["items"]) == 150


def test_palette_page_is_clamped(client):
    data = client.get("/palette?input=01&page=50").get_json()
    assert data["page"] == 1  # 64 codes fit on one page
    assert data["count"] == 64
    assert data["end"] == 64
    assert not data["has_next"]


def test_palette_last_page(client):
    data = client.get("/palette?input=abcd&page=28").get_json()
    assert data["start"] == 27 * 150 + 1
    assert data["end"] == 4096
    assert data["items"][-1]["code"] == "dddddd"


def test_palette_empty_input(client):
    data = client.get("/palette").get_json()
    assert data["count"] == 0
    assert data["total_pages"] == 0
    assert data["items"] == []


def test_palette_uppercase_and_capping(client):
    data = client.get("/palette?input=ABCDEF01").get_json()
    assert data["input"] == "abcdef"
    assert data["capped"] is True
    assert data["count"] == 46656


@pytest.mark.parametrize("query", ["input=xyz", "input=ab&page=0", "input=ab&page=two"])
def test_palette_bad_requests(client, query):
    resp = client.get(f"/palette?{query}")
    assert resp.status_code == 400
    assert "error" in resp.get_json()


def test_page_size_from_config():
    client = create_app({"TESTING": True, "PAGE_SIZE": 10}).test_client()
    data = client.get("/palette?input=01&page=7").get_json()
    assert data["page_size"] == 10
    assert data["total_pages"] == 7
    assert data["start"] == 61 and data["end"] == 64


def test_page_size_from_environment(monkeypatch):
    monkeypatch.setenv("HEXPERM_PAGE_SIZE", "32")
    client = create_app({"TESTING": True}).test_client()
    assert client.get("/palette?input=01").get_json()["total_pages"] == 2


def test_spectrum_json(client):
    data = client.get("/spectrum?input=f0").get_json()
    assert data["count"] == 64
    assert data["sampled"] == 64
    assert sorted(data["colors"]) == sorted(permutation_set("f0"))


def test_spectrum_json_samples_large_sets(client):
    data = client.get("/spectrum?input=012345").get_json()
    assert data["count"] == 46656
    assert data["sampled"] == len(range(0, 46656, 46656 // 2000))


def test_spectrum_png(client):
    resp = client.get("/spectrum.png?input=f0&width=120&height=30")
    assert resp.status_code == 200
    assert resp.mimetype == "image/png"
    assert Image.open(io.BytesIO(resp.data)).size == (120, 30)


def test_spectrum_png_dimensions_are_limited(client):
    resp = client.get("/spectrum.png?input=f0&width=100000&height=10")
    assert Image.open(io.BytesIO(resp.data)).size == (4096, 10)


def test_spectrum_png_empty(client):
    assert client.get("/spectrum.png").status_code == 204


def test_spectrum_png_bad_width(client):
    assert client.get("/spectrum.png?input=f0&width=0").status_code == 400


def test_swatch(client):
    data = client.get("/swatch/00ff00").get_json()
    assert data["clipboard"] == "#00ff00"
    assert data["rgb"] == [0, 255, 0]
    assert data["ink"] == "#000000"


def test_swatch_invalid(client):
    assert client.get("/swatch/nothex").status_code == 400


def test_unknown_route_stays_404(client):
    assert client.get("/missing").status_code == 404


def test_permutation_set_is_memoised():
    assert permutation_set("c3") is permutation_set("c3")


def test_responses_echo_the_canonical_alphabet(client):
    # the page drops any response whose input is not the alphabet on screen
    assert client.get("/palette?input=ABC").get_json()["input"] == "abc"
    assert client.get("/spectrum?input=ABC").get_json()["input"] == "abc"
    body = client.get("/").get_data(as_text=True)
    assert "data.input !== generated" in body
    assert "spec.input !== generated" in body


@pytest.mark.parametrize(
    "override",
    [
        {"PAGE_SIZE": 0},
        {"PAGE_SIZE": "150"},
        {"SPECTRUM_SAMPLE_CAP": -1},
        {"SPECTRUM_MAX_WIDTH": 0},
        {"DEBOUNCE_MS": -5},
        {"DEBOUNCE_THRESHOLD": True},
    ],
)
def test_bad_config_fails_at_startup(override):
    with pytest.raises(ValueError):
        create_app({"TESTING": True, **override})


def test_bad_environment_config_fails_at_startup(monkeypatch):
    monkeypatch.setenv("HEXPERM_PAGE_SIZE", "0")
    with pytest.raises(ValueError):
        create_app({"TESTING": True})


def test_zero_debounce_is_allowed():
    app = create_app({"TESTING": True, "DEBOUNCE_MS": 0})
    assert "const DEBOUNCE_MS = 0;" in app.test_client().get("/").get_data(as_text=True)


def test_no_static_route():
    app = create_app({"TESTING": True})
    assert app.static_folder is None
    assert "static" not in {rule.endpoint for rule in app.url_map.iter_rules()}
