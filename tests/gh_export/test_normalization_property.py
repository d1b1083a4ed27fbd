from __future__ import annotations

import datetime as dt
import string

from hypothesis import given
from hypothesis import strategies as st

from gh_export.exporter import normalize_issues
from gh_export.models import RawIssueRecord

NAME_CHARS = string.ascii_letters + string.digits + "-_. "

name_strategy = st.text(alphabet=NAME_CHARS, min_size=1, max_size=12)
timestamp_strategy = st.datetimes(
    min_value=dt.datetime(2008, 1, 1), max_value=dt.datetime(2099, 12, 31)
).map(lambda value: value.strftime("%Y-%m-%dT%H:%M:%SZ"))


@st.composite
def raw_records(draw: st.DrawFn) -> dict[str, object]:
    number = draw(st.integers(min_value=1, max_value=10**6))
    record: dict[str, object] = {
        "number": number,
        "title": draw(st.text(max_size=40)),
        "state": draw(st.sampled_from(["OPEN", "CLOSED", "open", "Closed"])),
        "labels": [{"name": name} for name in draw(st.lists(name_strategy, max_size=4))],
        "assignees": [
            {"login": login} for login in draw(st.lists(name_strategy, max_size=3))
        ],
        "milestone": draw(
            st.one_of(st.none(), name_strategy.map(lambda title: {"title": title}))
        ),
        "createdAt": draw(timestamp_strategy),
        "updatedAt": draw(timestamp_strategy),
        "url": f"https://github.com/org/repo/issues/{number}",
        "body": draw(st.one_of(st.none(), st.text(max_size=60))),
        "comments": draw(
            st.lists(st.fixed_dictionaries({"body": st.text(max_size=10)}), max_size=3)
        ),
    }
    return record


@given(payloads=st.lists(raw_records(), max_size=15))
def test_normalization_preserves_identity_fields(payloads: list[dict[str, object]]) -> None:
    records = [RawIssueRecord.model_validate(payload) for payload in payloads]

    issues = normalize_issues(records)

    assert len(issues) == len(payloads)
    for payload, issue in zip(payloads, issues):
        assert issue.number == payload["number"]
        assert issue.title == payload["title"]
        assert issue.state == str(payload["state"]).upper()
        assert issue.url == payload["url"]
        assert issue.created_at == payload["createdAt"]
        assert issue.updated_at == payload["updatedAt"]


@given(payload=raw_records())
def test_normalization_flattens_nested_shapes(payload: dict[str, object]) -> None:
    issue = normalize_issues([RawIssueRecord.model_validate(payload)])[0]

    assert list(issue.labels) == [label["name"] for label in payload["labels"]]  # type: ignore[attr-defined]
    assert list(issue.assignees) == [user["login"] for user in payload["assignees"]]  # type: ignore[attr-defined]
    milestone = payload["milestone"]
    assert issue.milestone == (milestone["title"] if milestone else None)  # type: ignore[index]
    assert issue.body == (payload["body"] or "")
    assert issue.comment_count == len(payload["comments"])  # type: ignore[arg-type]
