from __future__ import annotations

import random

from PySide6.QtTest import QTest

from achievement_app.achievement_store import LOGIN_ROUTE, AchievementStore
from achievement_app.dashboard import EMPTY_TITLE, DashboardView
from achievement_app.data_loader import DEFAULT_QUOTES
from achievement_app.form_widget import LOADING_TEXT, SUBMIT_TEXT
from achievement_app.storage import (
    KEY_QUOTE_INDEX,
    KEY_USER_NAME,
    DashboardStorage,
    JsonFileStore,
    MemoryStore,
)
from achievement_app.submission import SubmissionState


class RecordingNavigator:
    def __init__(self) -> None:
        self.routes = []

    def navigate(self, route: str) -> None:
        self.routes.append(route)


def _build(memory: MemoryStore, delay_ms: int = 50):
    store = AchievementStore(DashboardStorage(memory))
    store.load()
    navigator = RecordingNavigator()
    view = DashboardView(
        store, list(DEFAULT_QUOTES), navigator, submit_delay_ms=delay_ms, rng=random.Random(3)
    )
    return view, store, navigator


def _fill(view: DashboardView, **values: str) -> None:
    for name, value in values.items():
        view.form.set_value(name, value)


def test_submit_shows_single_card(qapp, wait_for):
    view, store, _ = _build(MemoryStore(), delay_ms=500)
    _fill(
        view,
        title="Finished OS course",
        description="Built a toy kernel",
        date="2024-05-01",
        category="Course",
    )

    view.form.submit_button.click()
    assert view.form.submit_button.text() == LOADING_TEXT
    assert not view.form.submit_button.isEnabled()

    assert wait_for(lambda: view.submission.state is SubmissionState.DONE)
    [slot] = view.card_manager.cards
    card = slot.widget
    assert card.title_label.text() == "Finished OS course"
    assert card.achievement.category == "Course"
    assert card.badge_label.text().endswith("Course")
    assert card.date_label.text() == "May 1, 2024"
    assert view.count_label.text() == "Your Achievements (1)"
    assert view.form.submit_button.text() == SUBMIT_TEXT
    assert view.form.draft.is_complete() is False
    assert view.form.title_input.text() == ""
    view.deleteLater()


def test_empty_state_and_clear_all_visibility(qapp, wait_for):
    view, store, _ = _build(MemoryStore())

    assert not view.empty_state.isHidden()
    assert view.empty_state.title_label.text() == EMPTY_TITLE
    assert view.clear_button.isHidden()

    _fill(view, title="Intro", description="d", date="2024-01-02", category="Project")
    view.form.submit()
    assert wait_for(lambda: len(store) == 1)

    assert view.empty_state.isHidden()
    assert not view.clear_button.isHidden()

    view.clear_button.click()
    assert len(store) == 0
    assert view.clear_button.isHidden()
    assert view.count_label.text() == "Your Achievements (0)"
    view.deleteLater()


def test_incomplete_form_does_not_submit(qapp):
    view, store, _ = _build(MemoryStore())
    _fill(view, title="Only a title")

    assert view.form.submit() is False
    assert view.submission.state is SubmissionState.IDLE
    assert view.form.description_input.styleSheet() != ""
    view.deleteLater()


def test_welcome_uses_display_name_and_stored_quote(qapp):
    memory = MemoryStore({KEY_USER_NAME: "Ada", KEY_QUOTE_INDEX: "2"})
    view, _, _ = _build(memory)

    assert view.welcome_label.text().startswith("Welcome back, Ada!")
    assert view.quote_index == 2
    assert view.quote_banner.label.text() == DEFAULT_QUOTES[2].display()
    view.deleteLater()


def test_teardown_cancels_pending_submission(qapp):
    view, store, _ = _build(MemoryStore(), delay_ms=30)
    _fill(view, title="t", description="d", date="2024-05-01", category="Semester")

    view.form.submit()
    view.teardown()
    QTest.qWait(100)

    assert view.submission.state is SubmissionState.CANCELLED
    assert len(store) == 0
    view.deleteLater()


def test_logout_routes_to_login(qapp):
    memory = MemoryStore({KEY_USER_NAME: "Ada"})
    view, _, navigator = _build(memory)

    view.logout_button.click()

    assert navigator.routes == [LOGIN_ROUTE]
    assert memory.get(KEY_USER_NAME) is None
    view.deleteLater()


def test_grid_switches_to_two_columns_when_wide(qapp):
    view, _, _ = _build(MemoryStore())

    view.card_manager.set_viewport_width(900)
    assert view.card_manager.columns == 2
    view.card_manager.set_viewport_width(500)
    assert view.card_manager.columns == 1
    view.deleteLater()


def test_partial_date_is_not_submitted(qapp):
    view, store, _ = _build(MemoryStore())
    _fill(view, title="Finished OS course", description="Built a toy kernel", date="2024-5", category="Course")

    assert view.form.submit() is False
    assert view.submission.state is SubmissionState.IDLE
    assert view.form.date_input.styleSheet() != ""
    assert len(store) == 0
    view.deleteLater()


def test_view_builds_when_store_cannot_be_written(qapp, tmp_path):
    path = tmp_path / "store.json"
    file_store = JsonFileStore(path)
    path.mkdir()
    store = AchievementStore(DashboardStorage(file_store))

    view = DashboardView(store, list(DEFAULT_QUOTES), RecordingNavigator(), rng=random.Random(3))

    assert 0 <= view.quote_index < len(DEFAULT_QUOTES)
    assert view.quote_banner.label.text() == view.current_quote.display()
    view.deleteLater()


def test_cleared_cards_fade_out_and_are_deleted(qapp, wait_for):
    view, store, _ = _build(MemoryStore())
    _fill(view, title="Intro", description="d", date="2024-01-02", category="Project")
    view.form.submit()
    assert wait_for(lambda: len(view.card_manager.cards) == 1)
    card = view.card_manager.cards[0].widget
    gone = []
    card.destroyed.connect(lambda: gone.append(True))

    store.clear_all()

    assert view.card_manager.cards == []
    assert wait_for(lambda: bool(gone))
    view.deleteLater()
