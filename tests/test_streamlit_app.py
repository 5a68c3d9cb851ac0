"""Smoke tests for the Streamlit page."""

from pathlib import Path

from streamlit.testing.v1 import AppTest

APP_FILE = str(Path(__file__).parent.parent / "streamlit_app.py")


def test_page_renders_counter_and_profile(monkeypatch):
    """The page runs end to end on the memory backend and counts the visitor."""
    monkeypatch.setenv('SIRAW_STORE_BACKEND', 'memory')
    monkeypatch.setenv('SIRAW_APP_ID', 'apptest')

    at = AppTest.from_file(APP_FILE, default_timeout=10)
    at.run()

    assert not at.exception
    rendered = ''.join(m.value for m in at.markdown)
    assert 'id="viewCount"' in rendered
    assert 'siraw a.k.a waris' in rendered
    assert at.session_state['view_tracked'] is True


def test_hiding_counter_tears_down_subscription(monkeypatch):
    monkeypatch.setenv('SIRAW_STORE_BACKEND', 'memory')

    at = AppTest.from_file(APP_FILE, default_timeout=10)
    at.run()
    assert 'live_view_count' in at.session_state

    at.toggle(key='show_counter').set_value(False).run()

    assert not at.exception
    assert 'live_view_count' not in at.session_state
