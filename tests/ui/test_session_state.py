"""
Tests for the remove confirmation state kept between Streamlit reruns.
"""

from app.ui.utils.session_state import clear_pending_remove, get_pending_remove, request_remove


class TestRemoveConfirmation:

    def test_nothing_pending_initially(self):
        assert get_pending_remove({}) is None

    def test_remove_waits_for_confirmation(self):
        state = {}

        request_remove(7, state)

        assert get_pending_remove(state) == 7

    def test_latest_request_wins(self):
        state = {}
        request_remove(7, state)
        request_remove(9, state)
        assert get_pending_remove(state) == 9

    def test_cancel_clears_request(self):
        state = {}
        request_remove(7, state)

        clear_pending_remove(state)

        assert get_pending_remove(state) is None
