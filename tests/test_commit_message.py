"""Tests for parsing, editing and processing commit messages."""

import pytest

from commitional.commit_message import (
    CommitMessage,
    CommitMessageFooter,
    CommitMessageHeader,
    InvalidFooterError,
)
from commitional.engine import RulesEngine
from commitional.models import GitContext

FULL_MESSAGE = (
    "feat(api): Add endpoint\n"
    "\n"
    "Longer description of the change.\n"
    "\n"
    "Refs: #123\n"
    "Signed-off-by: Jane Doe <jane@example.com>"
)


def test_parse_full_message():
    """Test parsing a message with header, body and a trailer block."""
    message = CommitMessage.from_string(FULL_MESSAGE)

    assert message.type == "feat"
    assert message.scopes == ["api"]
    assert message.subject == "Add endpoint"
    assert message.body == "Longer description of the change."
    assert message.trailers == ["Refs", "Signed-off-by"]
    assert message.footers == ["Refs: #123", "Signed-off-by: Jane Doe <jane@example.com>"]
    assert not message.is_breaking


def test_to_string_separates_paragraphs():
    message = CommitMessage.from_string(FULL_MESSAGE)
    assert message.to_string() == (
        "feat(api): Add endpoint\n\n"
        "Longer description of the change.\n\n"
        "Refs: #123\n\n"
        "Signed-off-by: Jane Doe <jane@example.com>"
    )


def test_round_trip_is_stable():
    rendered = CommitMessage.from_string(FULL_MESSAGE).to_string()
    assert CommitMessage.from_string(rendered).to_string() == rendered


def test_parse_normalizes_line_endings_and_blank_lines():
    message = CommitMessage.from_string("fix: Handle null\r\n\r\n\r\nFirst paragraph\r\n")
    assert message.body == "First paragraph"
    assert message.to_string() == "fix: Handle null\n\nFirst paragraph"


def test_parse_namespace_and_breaking_marker():
    message = CommitMessage.from_string("[myapp] fix(db)!: Drop legacy table")

    assert message.namespace == "myapp"
    assert message.type == "fix"
    assert message.scope == "db"
    assert message.subject == "Drop legacy table"
    assert message.is_breaking
    assert message.to_string() == "[myapp] fix(db)!: Drop legacy table"


def test_parse_header_without_type():
    message = CommitMessage.from_string("Just a subject")
    assert message.type == ""
    assert message.subject == "Just a subject"
    assert message.to_string() == "Just a subject"


def test_last_paragraph_shaped_like_footer_is_a_footer():
    message = CommitMessage.from_string("fix: Thing\n\nSee-also: this reads like a sentence")
    assert message.body == ""
    assert message.footers == ["See-also: this reads like a sentence"]


def test_footer_tokens_are_normalized():
    message = CommitMessage.from_string("feat: Add X\n\nsigned-off-by: Me\n\nBREAKING CHANGE: api removed")
    assert message.trailers == ["Signed-off-by", "BREAKING CHANGE"]
    assert message.is_breaking


def test_multiple_scopes():
    message = CommitMessage.from_string("feat(api,db,api): Add X")
    assert message.scopes == ["api", "db"]

    message.add_scope("ui").del_scope("api")
    assert message.scope == "db,ui"


def test_breaking_toggle():
    """Test that breaking() marks the header and manages the footer."""
    message = CommitMessage.from_string("feat: Add X")

    message.breaking("Old API removed")
    assert message.to_string() == "feat!: Add X ⚠️\n\nBREAKING CHANGE: Old API removed"

    message.breaking()
    assert message.to_string() == "feat: Add X"
    assert not message.is_breaking

    # the previous text is remembered
    message.breaking()
    assert message.footer("BREAKING CHANGE").text == "Old API removed"


def test_header_breaking_uses_configured_emoji():
    header = CommitMessageHeader.from_string("feat: Add X", breaking_emoji="💥")
    assert header.breaking().to_string() == "feat!: Add X 💥"
    assert header.breaking().to_string() == "feat: Add X"


def test_footer_get_upsert_remove():
    message = CommitMessage.from_string(FULL_MESSAGE)

    assert message.footer("refs").text == "#123"
    assert message.footer("Closes") is None

    message.footer("Refs", "#456")
    message.footer("closes", "#1")
    assert message.footers == [
        "Refs: #456",
        "Signed-off-by: Jane Doe <jane@example.com>",
        "Closes: #1",
    ]

    removed = message.footer("Refs", None)
    assert removed.text == "#456"
    assert message.trailers == ["Signed-off-by", "Closes"]


def test_invalid_footer_is_returned_not_raised():
    footer = CommitMessageFooter.from_string("not a footer")

    assert isinstance(footer, InvalidFooterError)
    assert str(footer) == "[Invalid footer] 'not a footer' does not conform to \"<Some-token>: <text content>\""


def test_setting_invalid_footers_raises():
    message = CommitMessage.from_string("feat: Add X")
    with pytest.raises(InvalidFooterError):
        message.footers = ["Refs: #1", "not a footer"]


def test_json_round_trip():
    message = CommitMessage.from_json({
        "type": "feat",
        "namespace": "myapp",
        "scope": "api,db",
        "subject": "Add X",
        "body": "Body text",
        "footers": ["refs: #1", {"token": "closes", "text": "#2"}],
    })

    assert message.to_string() == "[myapp] feat(api,db): Add X\n\nBody text\n\nRefs: #1\n\nCloses: #2"
    assert message.to_json() == {
        "type": "feat",
        "namespace": "myapp",
        "scope": ["api", "db"],
        "subject": "Add X",
        "body": "Body text",
        "footers": ["Refs: #1", "Closes: #2"],
    }


def test_styling_targets_parts_and_footers():
    message = CommitMessage.from_string(FULL_MESSAGE)
    message.set_style(lambda text: f"*{text}*")

    message.style("subject")
    assert message.to_string().startswith("feat(api): *Add endpoint*\n")

    message.style("footer", "Refs")
    assert "*Refs: #123*" in message.to_string()
    assert "\nSigned-off-by: Jane Doe" in message.to_string()

    message.unstyle()
    assert message.to_string() == CommitMessage.from_string(FULL_MESSAGE).to_string()


def test_process_fixes_subject(default_engine):
    message = CommitMessage.from_string("feat: add feature.")
    processed, valid, reports = message.process(default_engine)

    assert processed.to_string() == "feat: Add feature"
    assert valid
    assert reports == []
    # the parsed message is left alone
    assert message.subject == "add feature."


def test_process_without_fix_reports_per_part(default_engine):
    message = CommitMessage.from_string("feat: add feature.")
    processed, valid, reports = message.process(default_engine, attempt_fix=False)

    assert not valid
    assert processed.subject == "add feature."
    assert [report.type for report in reports] == ["subject"]
    assert reports[0].errors == [
        "[subject:0] The subject must never end with a full stop",
        "[subject:0] The subject must always be in Sentence case",
    ]


def test_process_checks_type_enum(default_engine):
    _, valid, reports = CommitMessage.from_string("feature: Add thing").process(default_engine)

    assert not valid
    assert reports[0].type == "type"
    assert reports[0].errors[0].startswith("[type:0] The type must always be one of 'feat', 'fix'")


def test_process_namespace_alignment():
    engine = RulesEngine.from_rules({"namespace-alignment": [2, "always", ["apps/*"]]})
    context = GitContext(files=["apps/myapp/index.ts"], is_staged=True)

    _, valid, _ = CommitMessage.from_string("[myapp] feat: Add thing").process(engine, context=context)
    assert valid

    _, valid, reports = CommitMessage.from_string("[otherapp] feat: Add thing").process(engine, context=context)
    assert not valid
    assert reports[0].type == "namespace"
    assert reports[0].errors == ['[namespace:0] Files in apps/myapp require namespace "myapp", got "otherapp"']


def test_process_reports_footers_by_token():
    engine = RulesEngine.from_rules({"footer-max-length": [2, "always", 10]})
    message = CommitMessage.from_string("fix: X\n\nRefs: short\n\nCloses: this text is far too long")

    _, valid, reports = message.process(engine, attempt_fix=False)

    assert not valid
    assert len(reports) == 1
    assert reports[0].type == "footer"
    assert reports[0].filter == "Closes"
    assert reports[0].errors == ["[footer:1] The footer must always be 10 characters or fewer"]


def test_process_adds_required_trailers():
    engine = RulesEngine.from_rules({"trailer-exists": [2, "always", ["Signed-off-by"]]})
    processed, valid, _ = CommitMessage.from_string("feat: Add X\n\nRefs: #1").process(engine)

    assert valid
    assert processed.trailers == ["Refs", "Signed-off-by"]
    assert processed.footer("Refs").text == "#1"


def test_process_removes_forbidden_trailers():
    engine = RulesEngine.from_rules({"trailer-exists": [2, "never", ["Refs"]]})
    processed, valid, _ = CommitMessage.from_string("feat: Add X\n\nRefs: #1\n\nCloses: #2").process(engine)

    assert valid
    assert processed.footers == ["Closes: #2"]


def test_process_single_scope():
    engine = RulesEngine.from_rules({"scope-allow-multiple": [2, "never", ","]})
    processed, valid, _ = CommitMessage.from_string("feat(api,db): Add X").process(engine)

    assert valid
    assert processed.to_string() == "feat(api): Add X"


def test_process_reparses_fixed_header():
    engine = RulesEngine.from_rules({"header-max-length": [2, "always", 20]})
    processed, valid, _ = CommitMessage.from_string("feat(api): Add a very long subject").process(engine)

    assert valid
    assert processed.to_string() == "feat(api): Add a ver"
    assert processed.subject == "Add a ver"


def test_process_wraps_body():
    engine = RulesEngine.from_rules({"body-max-line-length": [2, "always", 20]})
    message = CommitMessage.from_string("fix: X\n\nthis body line is much longer than twenty characters")

    processed, valid, _ = message.process(engine)

    assert valid
    assert all(len(line) <= 20 for line in processed.body.split("\n"))


def test_footer_without_text_survives_round_trip():
    message = CommitMessage.from_string("feat: Add X\n\nRefs: #1\nSigned-off-by:")

    assert message.body == ""
    assert message.trailers == ["Refs", "Signed-off-by"]
    assert message.footer("Signed-off-by").text == ""
    assert message.to_string() == "feat: Add X\n\nRefs: #1\n\nSigned-off-by:"
    assert CommitMessage.from_string(message.to_string()).to_string() == message.to_string()


def test_added_trailer_parses_back_as_footer():
    engine = RulesEngine.from_rules({"trailer-exists": [2, "always", ["Signed-off-by"]]})
    processed, _, _ = CommitMessage.from_string("feat: Add X").process(engine)

    assert processed.to_string() == "feat: Add X\n\nSigned-off-by:"
    reparsed = CommitMessage.from_string(processed.to_string())
    assert reparsed.trailers == ["Signed-off-by"]
    assert reparsed.body == ""
    _, valid, reports = reparsed.process(engine, attempt_fix=False)
    assert valid
    assert reports == []


def test_json_keeps_footers_without_text():
    message = CommitMessage.from_json({"subject": "Add X", "footers": ["Signed-off-by:"]})
    assert message.to_json()["footers"] == ["Signed-off-by:"]
    assert message.footer("Signed-off-by").text == ""


def test_header_truncation_keeps_breaking_emoji_whole():
    engine = RulesEngine.from_rules({"header-max-length": [2, "always", 14]})
    processed, valid, _ = CommitMessage.from_string("feat!: Add X ⚠️").process(engine)

    assert valid
    assert processed.subject == "Add X"
    assert processed.to_string() == "feat!: Add X"
