"""Tests for the legacy renamer and its script runner.

This test suite covers:
- Running whole scripts: literal output, conditional lines, REPLACE and FAIL
- Resolving the context (episodes, show, manual-link ordering)
- LegacyRenamer filename and destination entry points
"""

import pytest

from namewright.errors import (
    DataUnresolvableError,
    DestinationError,
    EmptyResultError,
    ScriptAbortedError,
    ScriptUnavailableError,
)
from namewright.models.core import EpisodeType, FileLocation, SeriesEpisode
from namewright.models.requests import PlacementRequest, RenameRequest
from namewright.models.script import RenameScript
from namewright.rules.legacy import LegacyRenamer, build_context, run_script
from namewright.utils.config import RenamerSettings
from tests.helpers.factories import (
    FakeProbe,
    abs_path,
    link_series,
    make_context,
    make_episode,
    make_file,
    make_folder,
    make_series,
    make_show,
    make_video,
)

SAMPLE_SCRIPT = """\
// Sample script
DO ADD [%grp] %ann - %enr
IF I(epr) DO ADD ' - %epr'
IF F(!1) DO ADD ' v%ver'
IF A(7) DO FAIL
DO REPLACE 'Sanpuru' 'Sample'
"""


class TestRunScript:
    """Tests for run_script."""

    def test_sample_script(self) -> None:
        """Test a typical multi-line script.

        Scenario:
        - Unconditional and conditional ADD lines build the name.
        - A FAIL on a false condition is skipped.
        - REPLACE runs over everything added so far.
        """
        assert run_script(SAMPLE_SCRIPT, make_context()) == (
            "[GG] Sample Shou - 05 - The Fifth Episode v2.mkv"
        )

    def test_literal_only_script(self) -> None:
        script = "DO ADD Hello\nDO ADD ' World'"
        assert run_script(script, make_context()) == "Hello World.mkv"

    def test_accepts_lines(self) -> None:
        assert run_script(["DO ADD %aid"], make_context()) == "42.mkv"

    def test_windows_newlines(self) -> None:
        assert run_script("DO ADD a\r\nDO ADD b\r\n", make_context()) == "ab.mkv"

    def test_fail_on_true_condition(self) -> None:
        with pytest.raises(ScriptAbortedError, match="FAIL"):
            run_script("DO ADD x\nIF A(42) DO FAIL", make_context())

    def test_unconditional_fail(self) -> None:
        with pytest.raises(ScriptAbortedError):
            run_script("DO FAIL\nDO ADD x", make_context())

    def test_empty_result(self) -> None:
        with pytest.raises(EmptyResultError):
            run_script("// nothing\nIF A(7) DO ADD x", make_context())

    def test_max_episode_length_setting(self) -> None:
        settings = RenamerSettings(max_episode_length=10)
        assert run_script("DO ADD %epr", make_context(), settings) == "The Fifth….mkv"


class TestBuildContext:
    """Tests for build_context."""

    def test_no_episodes(self) -> None:
        request = RenameRequest(file=make_file(), show=make_show())
        with pytest.raises(DataUnresolvableError, match="episode"):
            build_context(request)

    def test_no_show(self) -> None:
        request = RenameRequest(file=make_file(), episodes=[make_episode()])
        with pytest.raises(DataUnresolvableError, match="anime"):
            build_context(request)

    def test_catalog_files_keep_episode_order(self) -> None:
        episodes = [make_episode(id=2, number=6), make_episode(id=1, number=5)]
        request = RenameRequest(file=make_file(), episodes=episodes, show=make_show())
        assert [ep.number for ep in build_context(request).episodes] == [6, 5]

    def test_manual_links_sorted_by_kind_then_number(self) -> None:
        episodes = [
            make_episode(id=3, type=EpisodeType.SPECIAL, number=1),
            make_episode(id=2, number=3),
            make_episode(id=1, number=2),
        ]
        request = RenameRequest(
            file=make_file(catalog=None), episodes=episodes, show=make_show()
        )
        context = build_context(request)
        assert [(ep.type, ep.number) for ep in context.episodes] == [
            (EpisodeType.NORMAL, 2),
            (EpisodeType.NORMAL, 3),
            (EpisodeType.SPECIAL, 1),
        ]


class TestLegacyRenamer:
    """Tests for LegacyRenamer."""

    @pytest.fixture
    def renamer(self) -> LegacyRenamer:
        return LegacyRenamer()

    def _request(self, script: RenameScript | None) -> RenameRequest:
        return RenameRequest(
            file=make_file(), script=script, episodes=[make_episode()], show=make_show()
        )

    def test_get_filename(self, renamer: LegacyRenamer) -> None:
        request = self._request(RenameScript(script="DO ADD %ann - %enr"))
        assert renamer.get_filename(request) == "Sanpuru Shou - 05.mkv"

    def test_missing_script(self, renamer: LegacyRenamer) -> None:
        with pytest.raises(ScriptUnavailableError):
            renamer.get_filename(self._request(None))
        with pytest.raises(ScriptUnavailableError):
            renamer.get_filename(self._request(RenameScript(script=None)))

    def test_other_renamer_type_defers(self, renamer: LegacyRenamer) -> None:
        script = RenameScript(script="DO ADD x", renamer_type="Other")
        assert renamer.get_filename(self._request(script)) is None

    def test_get_destination(self) -> None:
        """Test that destinations come from the placement resolver.

        Scenario:
        - A sibling episode lives in /archive/Sample Show, an excluded folder.
        - The new file sits in the /import drop source.
        """
        library = make_folder(1, "/library", is_drop_destination=True)
        drop = make_folder(2, "/import", is_drop_source=True)
        archive = make_folder(3, "/archive", is_excluded=True)
        sibling_location = FileLocation(folder=archive, relative_path="Sample Show/old.mkv")
        series = make_series(
            [
                SeriesEpisode(
                    episode=make_episode(),
                    series_ids=[42],
                    videos=[make_video("OLD", [sibling_location])],
                )
            ]
        )
        file = link_series(make_file(path="/import/new.mkv", ed2k="NEW"), series)
        probe = FakeProbe(existing=[abs_path("/library"), abs_path("/archive/Sample Show")])
        renamer = LegacyRenamer(probe=probe)

        request = PlacementRequest(
            file=file,
            location=FileLocation(folder=drop, relative_path="new.mkv"),
            folders=[drop, library, archive],
            script=RenameScript(script=""),
        )
        destination = renamer.get_destination(request)
        assert destination.folder == archive
        assert destination.subfolder == "Sample Show"

    def test_get_destination_requires_script(self) -> None:
        drop = make_folder(2, "/import", is_drop_source=True)
        request = PlacementRequest(
            file=make_file(path="/import/new.mkv"),
            location=FileLocation(folder=drop, relative_path="new.mkv"),
            folders=[drop],
        )
        with pytest.raises(ScriptUnavailableError):
            LegacyRenamer(probe=FakeProbe()).get_destination(request)

    def test_get_destination_without_xrefs(self) -> None:
        drop = make_folder(2, "/import", is_drop_source=True)
        request = PlacementRequest(
            file=make_file(path="/import/new.mkv"),
            location=FileLocation(folder=drop, relative_path="new.mkv"),
            folders=[drop],
            script=RenameScript(script=""),
        )
        with pytest.raises(DestinationError) as excinfo:
            LegacyRenamer(probe=FakeProbe()).get_destination(request)
        assert excinfo.value.reason == "No xrefs"
