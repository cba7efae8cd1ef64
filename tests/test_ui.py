from io import BytesIO
from unittest.mock import patch

import pytest
from PIL import Image
from streamlit.testing.v1 import AppTest

from conftest import FOOD_REPLY, WASTE_REPLY
from foodprint.client import ProxyError, encode_image
from foodprint.flow import ScanSession, Stage


def png_data_url() -> str:
    buf = BytesIO()
    Image.new("RGB", (4, 4), "green").save(buf, format="PNG")
    return encode_image(buf.getvalue(), "plate.png")


@pytest.fixture
def health():
    with patch("foodprint.client.ProxyClient.health", return_value={"ok": True, "model": "m"}) as mock:
        yield mock


@pytest.fixture
def analyze():
    with patch("foodprint.client.ProxyClient.analyze") as mock:
        yield mock


@pytest.fixture
def app(env, health):
    at = AppTest.from_file("../foodprint/ui.py", default_timeout=30)
    at.run()
    yield at


def start(scan: ScanSession) -> AppTest:
    at = AppTest.from_file("../foodprint/ui.py", default_timeout=30)
    at.session_state["scan"] = scan
    at.session_state["scan_id"] = 0
    at.run()
    return at


def click(at: AppTest, label: str) -> AppTest:
    next(b for b in at.button if b.label == label).click().run()
    return at


def toasts(at: AppTest) -> list:
    return [t.value for t in at.toast]


def test_renders_three_tabs(app):
    assert not app.exception
    assert app.title[0].value == "🌿 Foodprint"
    assert [t.label for t in app.tabs] == ["Food Scan", "Global Plan", "Why It Works"]


def test_scan_tab_starts_empty(app):
    assert app.session_state["scan"].stage.value == "initial"
    # nothing to analyze until a photo is picked
    assert not [b for b in app.button if "Analyze" in b.label]


def test_no_warning_when_proxy_up(app):
    assert not [w for w in app.warning if "not reachable" in w.value]


def test_warning_when_proxy_misconfigured(env, health):
    health.return_value = {"ok": False, "error": "AI_TIMEOUT must be a number"}
    at = AppTest.from_file("../foodprint/ui.py", default_timeout=30)
    at.run()
    assert [w for w in at.warning if "AI_TIMEOUT" in w.value]


def test_warning_when_proxy_down(env, health):
    health.return_value = None
    at = AppTest.from_file("../foodprint/ui.py", default_timeout=30)
    at.run()
    assert [w for w in at.warning if "not reachable" in w.value]


class TestRunAnalysis:
    def test_picked_photo_shows_analyze_button(self, env, health):
        at = start(ScanSession(image=png_data_url()))
        assert not at.exception
        assert "✨ Analyze Carbon Impact" in [b.label for b in at.button]

    def test_accepted_food_result(self, env, health, analyze):
        analyze.return_value = dict(FOOD_REPLY)
        image = png_data_url()

        at = click(start(ScanSession(image=image)), "✨ Analyze Carbon Impact")

        assert not at.exception
        scan = at.session_state["scan"]
        assert scan.stage is Stage.FOOD_ANALYZED
        assert scan.meal_image == image
        assert not scan.busy
        assert "🍽️ Beef Burger" in [s.value for s in at.subheader]
        assert "Scan Another Meal" in [b.label for b in at.button]
        assert analyze.call_args.args[0] == image

    def test_low_confidence_stays_initial(self, env, health, analyze):
        analyze.return_value = dict(FOOD_REPLY, confidence=50)

        at = click(start(ScanSession(image=png_data_url())), "✨ Analyze Carbon Impact")

        assert not at.exception
        assert at.session_state["scan"].stage is Stage.INITIAL
        assert any("high confidence" in t for t in toasts(at))
        assert "🍽️ Beef Burger" not in [s.value for s in at.subheader]

    def test_proxy_error_toast(self, env, health, analyze):
        analyze.side_effect = ProxyError("Rate limit exceeded. Please try again in a moment.", status=429)

        at = click(start(ScanSession(image=png_data_url())), "✨ Analyze Carbon Impact")

        assert not at.exception
        scan = at.session_state["scan"]
        assert scan.stage is Stage.INITIAL
        assert not scan.busy
        assert any("Rate limit exceeded" in t for t in toasts(at))

    def test_waste_card(self, env, health, analyze):
        analyze.return_value = dict(WASTE_REPLY)
        scan = ScanSession(image=png_data_url(), meal_image=png_data_url(), food=dict(FOOD_REPLY))

        at = click(start(scan), "🗑️ Analyze Food Waste")

        assert not at.exception
        assert at.session_state["scan"].stage is Stage.WASTE_ANALYZED
        assert "🗑️ Food Waste" in [s.value for s in at.subheader]
        assert any("20% wasted" in m.value for m in at.markdown)
        assert analyze.call_args.kwargs["meal_context"] == FOOD_REPLY

    def test_scan_another_meal_resets(self, env, health):
        scan = ScanSession(meal_image=png_data_url(), food=dict(FOOD_REPLY), waste=dict(WASTE_REPLY))

        at = click(start(scan), "Scan Another Meal")

        assert not at.exception
        scan = at.session_state["scan"]
        assert scan.stage is Stage.INITIAL
        assert scan.meal_image is None
        assert at.session_state["scan_id"] == 1
        assert "Scan Another Meal" not in [b.label for b in at.button]


def test_lowercase_label_renders_card(env, health):
    scan = ScanSession(meal_image=png_data_url(), food=dict(FOOD_REPLY, label="high", tip=None))
    at = start(scan)
    assert not at.exception
    assert "🍽️ Beef Burger" in [s.value for s in at.subheader]
    assert not [e for e in at.error if "unexpected shape" in e.value]
