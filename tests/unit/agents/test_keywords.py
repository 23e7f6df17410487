"""Tests for keyword matching."""
from ticketcrew.agents.keywords import (
    KEYWORDS,
    find_keyword,
    keywords_for,
    match_topic,
    matches_all,
    unknown_topics,
)


def test_match_is_case_insensitive_substring():
    assert match_topic("Users see an ERROR page", "debugging") == "error"
    assert match_topic("everything is fine", "debugging") is None


def test_longer_keyword_wins_at_same_position():
    assert match_topic("Got an Internal Server Error", "server_error") == "internal server error"


def test_unknown_topic_matches_nothing():
    assert keywords_for("nope") == ()
    assert match_topic("anything", "nope") is None


def test_matches_all_requires_every_topic():
    assert matches_all("api call fails", ("api_integration", "failure"))
    assert not matches_all("api call works", ("api_integration", "failure"))
    assert not matches_all("api call fails", ())


def test_find_keyword_escapes_special_characters():
    assert find_keyword("our ci/cd is red", ("ci/cd",)) == "ci/cd"
    assert find_keyword("cicd", ("ci/cd",)) is None


def test_unknown_topics():
    assert unknown_topics(("debugging", "bogus")) == ["bogus"]


def test_keyword_lists_are_lowercase():
    for topic, keywords in KEYWORDS.items():
        assert keywords, topic
        assert all(keyword == keyword.lower() for keyword in keywords), topic
