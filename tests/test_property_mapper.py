"""Tests for converting stars to Notion properties."""

from stars_sync.property_mapper import (
    MAX_TEXT_LENGTH,
    OPTIONAL_PROPERTIES,
    REQUIRED_PROPERTIES,
    get_properties_from_star,
)


def test_full_star(make_star):
    properties = get_properties_from_star(make_star(42))

    assert properties == {
        "Name": {"title": [{"type": "text", "text": {"content": "octocat/repo-42"}}]},
        "Star ID": {"number": 42},
        "URL": {"url": "https://github.com/octocat/repo-42"},
        "Starred": {"date": {"start": "2024-01-02T03:04:05Z"}},
        "Created": {"date": {"start": "2020-01-01T00:00:00Z"}},
        "Pushed": {"date": {"start": "2024-01-01T00:00:00Z"}},
        "Stargazers": {"number": 10},
        "Watchers": {"number": 10},
        "Forks": {"number": 2},
        "Size (Kb)": {"number": 128},
        "Homepage": {"url": "https://example.com"},
        "Description": {"rich_text": [{"type": "text", "text": {"content": "A repository"}}]},
        "Language": {"select": {"name": "Python"}},
        "Topics": {"multi_select": [{"name": "cli"}, {"name": "notion"}]},
    }


def test_absent_optional_fields_are_omitted(make_star):
    star = make_star(1, homepage=None, description=None, language=None, topics=())

    properties = get_properties_from_star(star)

    for name in ("Homepage", "Description", "Language", "Topics"):
        assert name not in properties


def test_required_fields_always_present(make_star):
    star = make_star(1, homepage=None, description=None, language=None, topics=(), pushed_at=None)

    properties = get_properties_from_star(star)

    assert set(REQUIRED_PROPERTIES) <= set(properties)
    assert not set(OPTIONAL_PROPERTIES) & set(properties)
    assert properties["Pushed"] == {"date": None}


def test_mapping_is_pure(make_star):
    star = make_star(3)

    assert get_properties_from_star(star) == get_properties_from_star(star)


def test_long_text_is_truncated(make_star):
    star = make_star(1, description="d" * (MAX_TEXT_LENGTH + 50))

    content = get_properties_from_star(star)["Description"]["rich_text"][0]["text"]["content"]

    assert len(content) == MAX_TEXT_LENGTH


def test_commas_removed_from_option_names(make_star):
    star = make_star(1, topics=("a,b",), language="C, C++")

    properties = get_properties_from_star(star)

    assert properties["Topics"] == {"multi_select": [{"name": "a b"}]}
    assert properties["Language"] == {"select": {"name": "C  C++"}}


def test_empty_values_on_directly_built_star_are_omitted(make_star):
    star = make_star(1, homepage="", description="", language="  ", topics=[])

    properties = get_properties_from_star(star)

    assert not {"Homepage", "Description", "Language", "Topics"} & set(properties)
    assert set(REQUIRED_PROPERTIES) <= set(properties)


def test_topics_list_is_accepted(make_star):
    properties = get_properties_from_star(make_star(1, topics=["cli"]))

    assert properties["Topics"] == {"multi_select": [{"name": "cli"}]}
