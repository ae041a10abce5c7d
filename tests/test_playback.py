"""
Tests for PlaybackController - selection, skipping, removal, player events.
"""
import random
import pytest
from pathlib import Path
from unittest.mock import MagicMock, call

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from tunedeck.api.playlist import PlaylistRepository
from tunedeck.controllers.adapter import PlayerAdapter
from tunedeck.controllers.playback import PlaybackController
from tunedeck.errors import InvalidUrlError, IndexOutOfRangeError
from tunedeck.models import ControllerState, Intent, PlayerState

from conftest import URL_A, URL_B, URL_C, ID_A, ID_B, ID_C


def assert_index_invariant(ctrl: PlaybackController):
    count = len(ctrl.playlist)
    if count == 0:
        assert ctrl.current_index == -1
    else:
        assert ctrl.current_index == -1 or 0 <= ctrl.current_index < count


class TestStartup:
    """Tests for controller start and player attach."""

    def test_start_loads_playlist_idle(self, store_with_playlist):
        ctrl = PlaybackController(PlaylistRepository(store_with_playlist))
        ctrl.start()
        assert len(ctrl.playlist) == 3
        assert ctrl.current_index == -1
        assert ctrl.state == ControllerState.IDLE
        assert ctrl.intent == Intent.STOPPED

    def test_attach_binds_events_and_applies_volume(self, store, adapter):
        ctrl = PlaybackController(PlaylistRepository(store), volume=40)
        ctrl.start()
        ctrl.attach(adapter)

        adapter.bind.assert_called_once_with(ctrl.on_state_changed, ctrl.on_error)
        adapter.set_volume.assert_called_once_with(40)
        adapter.load_and_cue.assert_not_called()
        assert ctrl.is_ready

    def test_commands_before_ready_are_rederived_on_attach(self, store, adapter):
        """A track picked before the player exists is loaded once it is ready."""
        ctrl = PlaybackController(PlaylistRepository(store), volume=55)
        ctrl.start()
        ctrl.add_track(URL_A)
        assert ctrl.state == ControllerState.READY_PLAYING
        assert not ctrl.is_ready

        ctrl.attach(adapter)

        adapter.load_and_cue.assert_called_once_with(ID_A)
        adapter.set_volume.assert_called_with(55)

    def test_paused_state_not_reloaded_on_attach(self, controller, adapter):
        controller.select_track(1)
        controller.toggle_play_pause()
        new_adapter = MagicMock(spec=PlayerAdapter)

        controller.attach(new_adapter)

        new_adapter.load_and_cue.assert_not_called()

    def test_close_destroys_player(self, controller, adapter):
        controller.close()
        adapter.destroy.assert_called_once()
        assert not controller.is_ready

    def test_close_without_player(self, repository):
        ctrl = PlaybackController(repository)
        ctrl.close()  # no error


class TestAddTrack:
    """Tests for adding tracks through the controller."""

    def test_first_track_auto_starts(self, empty_controller, adapter):
        """Adding to an empty playlist selects index 0 and plays."""
        empty_controller.add_track(URL_A)

        assert empty_controller.current_index == 0
        assert empty_controller.state == ControllerState.READY_PLAYING
        adapter.load_and_cue.assert_called_once_with(ID_A)
        adapter.set_volume.assert_called_with(70)

    def test_later_tracks_do_not_interrupt(self, empty_controller, adapter):
        empty_controller.add_track(URL_A)
        adapter.reset_mock()

        empty_controller.add_track(URL_B)

        assert empty_controller.current_index == 0
        assert adapter.method_calls == []

    def test_add_to_unselected_playlist_stays_idle(self, controller, adapter):
        controller.add_track(URL_A)
        assert controller.current_index == -1
        assert controller.state == ControllerState.IDLE
        assert adapter.method_calls == []

    def test_invalid_url_leaves_state(self, controller, adapter):
        controller.select_track(2)
        adapter.reset_mock()

        with pytest.raises(InvalidUrlError):
            controller.add_track('not a url')

        assert len(controller.playlist) == 3
        assert controller.current_index == 2
        assert adapter.method_calls == []

    def test_add_is_persisted(self, empty_controller, store):
        empty_controller.add_track(URL_C)
        repo = PlaylistRepository(store)
        assert [t.id for t in repo.load()] == [ID_C]


class TestSelectAndToggle:
    """Tests for select and play/pause."""

    def test_select_loads_track(self, controller, adapter):
        controller.select_track(1)
        assert controller.current_index == 1
        assert controller.current_track.id == ID_B
        assert controller.intent == Intent.PLAYING
        assert adapter.method_calls == [call.load_and_cue(ID_B), call.set_volume(70)]

    def test_select_out_of_range(self, controller, adapter):
        with pytest.raises(IndexOutOfRangeError):
            controller.select_track(3)
        assert controller.current_index == -1
        assert adapter.method_calls == []

    def test_toggle_when_idle_selects_first(self, controller, adapter):
        controller.toggle_play_pause()
        assert controller.current_index == 0
        adapter.load_and_cue.assert_called_once_with(ID_A)

    def test_toggle_when_idle_and_empty_does_nothing(self, empty_controller, adapter):
        empty_controller.toggle_play_pause()
        assert empty_controller.state == ControllerState.IDLE
        assert adapter.method_calls == []

    def test_toggle_pauses_and_resumes(self, controller, adapter):
        controller.select_track(0)
        adapter.reset_mock()

        controller.toggle_play_pause()
        assert controller.intent == Intent.PAUSED
        assert controller.state == ControllerState.READY_PAUSED
        adapter.pause.assert_called_once()

        controller.toggle_play_pause()
        assert controller.intent == Intent.PLAYING
        adapter.play.assert_called_once()

    def test_toggle_without_player_flips_intent(self, store_with_playlist):
        ctrl = PlaybackController(PlaylistRepository(store_with_playlist))
        ctrl.start()
        ctrl.select_track(0)
        ctrl.toggle_play_pause()
        assert ctrl.intent == Intent.PAUSED


class TestSkip:
    """Tests for skip forward/backward wraparound."""

    def test_skip_next(self, controller, adapter):
        controller.select_track(0)
        controller.skip_next()
        assert controller.current_index == 1
        adapter.load_and_cue.assert_called_with(ID_B)

    def test_skip_next_wraps_to_first(self, controller, adapter):
        """Forward from the last track goes to index 0, not stop."""
        controller.select_track(2)
        controller.skip_next()
        assert controller.current_index == 0
        assert controller.state == ControllerState.READY_PLAYING
        adapter.load_and_cue.assert_called_with(ID_A)

    def test_skip_previous_wraps_to_last(self, controller, adapter):
        controller.select_track(0)
        controller.skip_previous()
        assert controller.current_index == 2
        adapter.load_and_cue.assert_called_with(ID_C)

    def test_skip_previous(self, controller):
        controller.select_track(2)
        controller.skip_previous()
        assert controller.current_index == 1

    def test_skip_from_idle(self, controller):
        controller.skip_next()
        assert controller.current_index == 0

    def test_skip_on_empty_playlist(self, empty_controller, adapter):
        empty_controller.skip_next()
        empty_controller.skip_previous()
        assert empty_controller.current_index == -1
        assert adapter.method_calls == []


class TestRemoveTrack:
    """Tests for removal and index repair."""

    def test_remove_current_selects_first(self, controller, adapter):
        """Removing the playing middle track stops, then loads index 0."""
        controller.select_track(1)
        adapter.reset_mock()

        controller.remove_track(1)

        assert [t.id for t in controller.playlist] == [ID_A, ID_C]
        assert controller.current_index == 0
        assert controller.intent == Intent.PLAYING
        assert adapter.method_calls[0] == call.stop()
        adapter.load_and_cue.assert_called_once_with(ID_A)

    def test_remove_before_current_shifts_index(self, controller, adapter):
        """Removing an earlier track keeps playing with no player command."""
        controller.select_track(2)
        adapter.reset_mock()

        controller.remove_track(0)

        assert controller.current_index == 1
        assert controller.current_track.id == ID_C
        assert adapter.method_calls == []

    def test_remove_after_current_keeps_index(self, controller, adapter):
        controller.select_track(0)
        adapter.reset_mock()

        controller.remove_track(2)

        assert controller.current_index == 0
        assert adapter.method_calls == []

    def test_remove_last_remaining_goes_idle(self, empty_controller, adapter):
        empty_controller.add_track(URL_A)
        adapter.reset_mock()

        empty_controller.remove_track(0)

        assert empty_controller.current_index == -1
        assert empty_controller.state == ControllerState.IDLE
        assert empty_controller.intent == Intent.STOPPED
        adapter.stop.assert_called_once()
        adapter.load_and_cue.assert_not_called()

    def test_remove_out_of_range(self, controller, adapter):
        controller.select_track(1)
        adapter.reset_mock()
        with pytest.raises(IndexOutOfRangeError):
            controller.remove_track(5)
        assert controller.current_index == 1
        assert len(controller.playlist) == 3
        assert adapter.method_calls == []

    def test_remove_is_persisted(self, controller, store_with_playlist):
        controller.remove_track(0)
        repo = PlaylistRepository(store_with_playlist)
        assert [t.id for t in repo.load()] == [ID_B, ID_C]

    def test_index_invariant_through_removals(self, controller):
        controller.select_track(2)
        for index in (1, 1, 0):
            controller.remove_track(index)
            assert_index_invariant(controller)
        assert controller.current_index == -1


class TestPlayerEvents:
    """Tests for ended/error events from the player."""

    @pytest.mark.parametrize('start', [0, 1, 2])
    def test_ended_advances_like_skip(self, controller, adapter, start):
        controller.select_track(start)
        controller.on_state_changed(PlayerState.ENDED)
        assert controller.current_index == (start + 1) % 3
        assert controller.intent == Intent.PLAYING

    @pytest.mark.parametrize('start', [0, 1, 2])
    def test_error_advances_like_skip(self, controller, adapter, start):
        controller.select_track(start)
        adapter.reset_mock()

        controller.on_error(150)

        expected = (start + 1) % 3
        assert controller.current_index == expected
        adapter.load_and_cue.assert_called_once_with(controller.playlist[expected].id)

    def test_other_states_recorded_only(self, controller, adapter):
        controller.select_track(1)
        adapter.reset_mock()

        controller.on_state_changed(PlayerState.BUFFERING)
        controller.on_state_changed(PlayerState.PAUSED)

        assert controller.player_state == PlayerState.PAUSED
        assert controller.intent == Intent.PLAYING
        assert controller.current_index == 1
        assert adapter.method_calls == []

    def test_events_when_idle_ignored(self, controller, adapter):
        controller.on_state_changed(PlayerState.ENDED)
        controller.on_error(2)
        assert controller.current_index == -1
        assert adapter.method_calls == []

    def test_all_tracks_failing_stops_after_one_cycle(self, controller, adapter):
        """Errors on every track stop auto-advance instead of looping."""
        controller.select_track(0)
        for _ in range(3):
            controller.on_error(150)
        assert controller.intent == Intent.PLAYING

        adapter.reset_mock()
        controller.on_error(150)

        assert controller.intent == Intent.STOPPED
        adapter.stop.assert_called_once()
        adapter.load_and_cue.assert_not_called()
        assert_index_invariant(controller)

    def test_playing_event_resets_error_count(self, controller):
        controller.select_track(0)
        for _ in range(10):
            controller.on_error(150)
            controller.on_state_changed(PlayerState.PLAYING)
        assert controller.intent == Intent.PLAYING

    def test_toggle_after_error_stop_reloads(self, controller, adapter):
        controller.select_track(0)
        for _ in range(4):
            controller.on_error(150)
        adapter.reset_mock()

        controller.toggle_play_pause()

        assert controller.intent == Intent.PLAYING
        adapter.load_and_cue.assert_called_once_with(controller.current_track.id)


class TestVolume:
    """Tests for volume handling."""

    def test_volume_applied_immediately(self, controller, adapter):
        assert controller.set_volume(30) == 30
        adapter.set_volume.assert_called_once_with(30)

    def test_volume_clamped(self, controller):
        assert controller.set_volume(150) == 100
        assert controller.set_volume(-5) == 0

    def test_volume_retained_without_player(self, store_with_playlist, adapter):
        ctrl = PlaybackController(PlaylistRepository(store_with_playlist))
        ctrl.start()
        ctrl.set_volume(25)
        ctrl.attach(adapter)
        adapter.set_volume.assert_called_once_with(25)

    def test_volume_reapplied_on_load(self, controller, adapter):
        controller.set_volume(45)
        adapter.reset_mock()
        controller.select_track(0)
        adapter.set_volume.assert_called_once_with(45)

    def test_step_volume(self, controller):
        controller.set_volume(70)
        assert controller.step_volume(1) == 75
        assert controller.step_volume(-1) == 70

    def test_snapshot(self, controller):
        controller.select_track(1)
        snap = controller.snapshot()
        assert snap.current_index == 1
        assert snap.is_playing
        assert snap.volume == 70


class TestIndexInvariant:
    """Index stays valid through long mixed sequences of intents and events."""

    @pytest.mark.parametrize('seed', range(8))
    def test_mixed_operations(self, empty_controller, seed):
        rng = random.Random(seed)
        ctrl = empty_controller
        urls = [URL_A, URL_B, URL_C] + [f'https://youtu.be/vid{n:08d}' for n in range(5)]

        def remove():
            index = rng.randint(-1, len(ctrl.playlist))
            before = (ctrl.current_index, len(ctrl.playlist))
            try:
                ctrl.remove_track(index)
            except IndexOutOfRangeError:
                assert (ctrl.current_index, len(ctrl.playlist)) == before

        def select():
            index = rng.randint(-1, len(ctrl.playlist))
            before = ctrl.current_index
            try:
                ctrl.select_track(index)
            except IndexOutOfRangeError:
                assert ctrl.current_index == before

        def add():
            try:
                ctrl.add_track(rng.choice(urls + ['https://example.com/nope']))
            except InvalidUrlError:
                pass

        operations = [
            add, add, remove, select,
            ctrl.toggle_play_pause,
            ctrl.skip_next,
            ctrl.skip_previous,
            lambda: ctrl.on_state_changed(PlayerState.ENDED),
            lambda: ctrl.on_state_changed(PlayerState.PLAYING),
            lambda: ctrl.on_error(rng.choice([2, 100, 150])),
            lambda: ctrl.set_volume(rng.randint(-20, 120)),
            lambda: ctrl.attach(MagicMock(spec=PlayerAdapter)),
        ]

        for _ in range(300):
            rng.choice(operations)()
            assert_index_invariant(ctrl)
            assert 0 <= ctrl.volume <= 100
            if ctrl.current_index >= 0:
                assert ctrl.current_track is ctrl.playlist[ctrl.current_index]
            else:
                assert ctrl.state == ControllerState.IDLE
