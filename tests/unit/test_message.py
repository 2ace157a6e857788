"""Tests for commit message parsing and consolidation."""

from combine_merges.message import (
    consolidate_messages,
    parse_message,
    render_message,
)


class TestParseMessage:
    """Tests for the conflict section scanner."""

    def test_message_without_conflicts_is_kept_whole(self):
        parsed = parse_message("subject\n\nbody line\n# not a marker\n\n\n")

        assert parsed.saved_lines == [
            "subject", "", "body line", "# not a marker"
        ]
        assert parsed.conflicts == []
        assert not parsed.has_conflicts

    def test_conflict_entries_are_collected_verbatim(self):
        parsed = parse_message(
            "Merge branch 'x'\n\n# Conflicts:\n#\ta.c\n#\tdir/b.c\n"
        )

        assert parsed.saved_lines == ["Merge branch 'x'"]
        assert parsed.conflicts == ["#\ta.c", "#\tdir/b.c"]

    def test_blank_lines_before_marker_are_trimmed(self):
        parsed = parse_message("subject\n\n\n\n# Conflicts:\n#\ta\n")

        assert parsed.saved_lines == ["subject"]

    def test_text_after_conflict_block_is_discarded(self):
        parsed = parse_message(
            "subject\n\n# Conflicts:\n#\ta\n\nSigned-off-by: someone\n"
        )

        assert parsed.saved_lines == ["subject"]
        assert parsed.conflicts == ["#\ta"]

    def test_block_ends_at_first_non_entry_line(self):
        parsed = parse_message(
            "subject\n# Conflicts:\n#\ta\n# b\n#\tc\n"
        )

        # "# b" has no tab, so "#\tc" is never reached
        assert parsed.conflicts == ["#\ta"]

    def test_marker_must_match_exactly(self):
        parsed = parse_message("subject\n\n# Conflicts: \n#\ta\n")

        assert parsed.conflicts == []
        assert parsed.saved_lines == [
            "subject", "", "# Conflicts: ", "#\ta"
        ]

    def test_marker_on_first_line_with_nothing_before(self):
        parsed = parse_message("# Conflicts:\n#\ta\n")

        assert parsed.saved_lines == []
        assert parsed.conflicts == ["#\ta"]

    def test_only_blank_lines_before_marker(self):
        parsed = parse_message("\n\n\n# Conflicts:\n#\ta\n")

        assert parsed.saved_lines == []
        assert parsed.conflicts == ["#\ta"]

    def test_whitespace_only_lines_are_not_blank(self):
        parsed = parse_message("subject\n  \n")

        assert parsed.saved_lines == ["subject", "  "]

    def test_empty_message(self):
        parsed = parse_message("")

        assert parsed.saved_lines == []
        assert parsed.conflicts == []


class TestRenderMessage:
    """Tests for message assembly."""

    def test_without_conflicts_joins_lines(self):
        assert render_message(["a", "", "b"], set()) == "a\n\nb"

    def test_conflicts_are_sorted_and_deduplicated(self):
        message = render_message(
            ["merge"], ["#\tz.txt", "#\ta.txt", "#\tz.txt"]
        )

        assert message == "merge\n\n# Conflicts:\n#\ta.txt\n#\tz.txt\n"


class TestConsolidateMessages:
    """Tests for combining a chain's messages."""

    def test_example_chain(self):
        fix = "fix\n\n# Conflicts:\n#\tfile1.txt\n"
        fix2 = "fix2\n\n# Conflicts:\n#\tfile2.txt\n"
        tip = "merge\n"

        message = consolidate_messages(tip, [tip, fix2, fix])

        assert message == (
            "merge\n\n# Conflicts:\n#\tfile1.txt\n#\tfile2.txt\n"
        )

    def test_no_conflicts_anywhere_gives_trimmed_tip(self):
        tip = "Merge branch 'upstream'\n\nDetails here.\n\n"

        message = consolidate_messages(tip, [tip, "other\n", "more\n"])

        assert message == "Merge branch 'upstream'\n\nDetails here."

    def test_overlapping_paths_appear_once(self):
        a = "a\n\n# Conflicts:\n#\tshared.c\n#\tonly-a.c\n"
        b = "b\n\n# Conflicts:\n#\tshared.c\n#\tonly-b.c\n"

        message = consolidate_messages("tip\n", [a, b])

        assert message.count("#\tshared.c") == 1
        assert message.endswith(
            "# Conflicts:\n#\tonly-a.c\n#\tonly-b.c\n#\tshared.c\n"
        )

    def test_tip_conflicts_are_included(self):
        tip = "tip\n\n# Conflicts:\n#\tb.c\n"
        other = "other\n\n# Conflicts:\n#\ta.c\n"

        message = consolidate_messages(tip, [other])

        assert message == "tip\n\n# Conflicts:\n#\ta.c\n#\tb.c\n"
