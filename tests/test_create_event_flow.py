from __future__ import annotations

from datetime import date, time, timedelta

from state.preferences import InMemoryPreferences
from wizard.flows.create_event import create_event_wizard, is_invite_visible
from wizard.navigation import TransitionKind, WizardController

FRIENDS_KEY = "@kalon_selected_friends"


def _wizard(submitter, **kwargs) -> WizardController:
    return create_event_wizard(submitter=submitter, **kwargs)


def _fill_event_info(controller: WizardController, event_day: date) -> None:
    controller.set_field("event_name", "  Campus Jam ")
    controller.set_field("host_by", "Music Club")
    controller.set_field("event_date", event_day)
    controller.set_field("from_time", time(18, 0))
    controller.set_field("to_time", time(20, 30))


def test_event_info_blocks_on_past_date_and_time_order(submitter, today) -> None:
    controller = _wizard(submitter)
    _fill_event_info(controller, today - timedelta(days=1))
    controller.set_field("to_time", time(17, 0))

    assert controller.advance().kind is TransitionKind.BLOCKED
    assert controller.errors["event_date"] == "Event date cannot be in the past"
    assert controller.errors["to_time"] == "End time must be after start time"


def test_changing_start_time_rechecks_end_time(submitter, today) -> None:
    controller = _wizard(submitter)
    _fill_event_info(controller, today)
    controller.set_field("to_time", time(17, 0))
    controller.blur_field("to_time")
    assert "to_time" in controller.errors

    controller.set_field("from_time", time(16, 0))

    assert "to_time" not in controller.errors


def test_category_is_required(submitter, today) -> None:
    controller = _wizard(submitter)
    _fill_event_info(controller, today + timedelta(days=2))
    controller.advance()

    assert controller.advance().kind is TransitionKind.BLOCKED
    assert controller.errors["category"] == "Please select a category"

    controller.select("category", "music")
    assert "category" not in controller.errors
    assert controller.advance().kind is TransitionKind.MOVED


def test_private_event_reveals_optional_invites(submitter) -> None:
    controller = _wizard(submitter)
    assert controller.get_field("event_type") == "Public"
    assert not is_invite_visible(controller.values())

    controller.select("event_type", "Private")

    assert is_invite_visible(controller.values())


def test_public_event_payload(submitter, today) -> None:
    event_day = today + timedelta(days=5)
    controller = _wizard(submitter)
    _fill_event_info(controller, event_day)
    controller.advance()
    controller.select("category", "tech")
    controller.advance()
    controller.set_field("invited_friends", ("f1",))
    assert controller.advance().kind is TransitionKind.MOVED

    # thumbnail step never blocks
    assert controller.advance().kind is TransitionKind.SUBMITTED

    payload = submitter.payloads[0]
    assert payload == {
        "eventName": "Campus Jam",
        "hostBy": "Music Club",
        "eventDate": event_day.isoformat(),
        "fromTime": f"{event_day.isoformat()}T18:00:00",
        "toTime": f"{event_day.isoformat()}T20:30:00",
        "eventMode": "Online",
        "selectedCategory": "tech",
        "eventType": "Public",
    }


def test_private_event_sends_friends_and_remote_thumbnail(submitter, today) -> None:
    controller = _wizard(submitter)
    _fill_event_info(controller, today + timedelta(days=1))
    controller.set_field("description", "Bring your instruments")
    controller.set_field("event_mode", "Offline")
    controller.advance()
    controller.select("category", "music")
    controller.advance()
    controller.select("event_type", "Private")
    controller.set_field("invited_friends", ["f1", "f2"])
    controller.advance()
    controller.set_field("thumbnail_uri", "https://cdn.kalon.app/events/1.png")

    assert controller.advance().kind is TransitionKind.SUBMITTED

    payload = submitter.payloads[0]
    assert payload["selectedFriends"] == ["f1", "f2"]
    assert payload["description"] == "Bring your instruments"
    assert payload["eventMode"] == "Offline"
    assert payload["thumbnailUri"] == "https://cdn.kalon.app/events/1.png"


def test_local_thumbnail_is_not_sent(submitter, today) -> None:
    controller = _wizard(submitter)
    _fill_event_info(controller, today + timedelta(days=1))
    controller.advance()
    controller.select("category", "art-culture")
    controller.advance()
    controller.advance()
    controller.set_field("thumbnail_uri", "file:///tmp/photo.jpg")
    controller.advance()

    assert "thumbnailUri" not in submitter.payloads[0]


def test_invited_friends_round_trip_through_preferences(submitter) -> None:
    preferences = InMemoryPreferences({FRIENDS_KEY: ["f9"]})
    controller = _wizard(submitter, preferences=preferences)

    assert controller.get_field("invited_friends") == ("f9",)

    controller.set_field("invited_friends", ("f1", "f2"))

    assert preferences.get(FRIENDS_KEY) == ["f1", "f2"]
