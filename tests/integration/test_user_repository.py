"""Repository tests against a temporary SQLite database."""

import pytest
from sqlalchemy.exc import IntegrityError

from app.db.repositories.user import UserRepository
from app.models.user import User
from app.userbase.query import build_user_query


@pytest.fixture
def repository(session):
    return UserRepository(session)


class TestFind:
    def test_default_order_newest_first(self, repository, make_user):
        old = make_user(name="Old", minutes=1)
        new = make_user(name="New", minutes=30)
        mid = make_user(name="Mid", minutes=10)

        users = repository.find(build_user_query())
        assert [u.id for u in users] == [new.id, mid.id, old.id]

    def test_multi_key_sort(self, repository, make_user):
        make_user(name="Bob", age=20)
        make_user(name="Ann", age=30)
        make_user(name="Ann", age=40)

        users = repository.find(build_user_query(sort="name:asc,age:desc"))
        assert [(u.name, u.age) for u in users] == [("Ann", 40), ("Ann", 30), ("Bob", 20)]

    def test_status_and_city_filters_are_anded(self, repository, make_user):
        match = make_user(status="inactive", city="Boston")
        make_user(status="inactive", city="Denver")
        make_user(status="active", city="Boston")

        users = repository.find(build_user_query(status="inactive", city="Boston"))
        assert [u.id for u in users] == [match.id]

    def test_unknown_status_matches_nothing(self, repository, make_user):
        make_user()
        assert repository.find(build_user_query(status="banned")) == []

    def test_search_matches_name_or_email(self, repository, make_user):
        john = make_user(name="John", email="jsmith@x.com")
        bjo = make_user(name="Barbara", email="bjo@x.com")
        make_user(name="Alice", email="alice@x.com")

        users = repository.find(build_user_query(search="jo", sort="name"))
        assert {u.id for u in users} == {john.id, bjo.id}

    def test_search_is_case_insensitive(self, repository, make_user):
        john = make_user(name="John")
        assert [u.id for u in repository.find(build_user_query(search="JOHN"))] == [john.id]

    def test_search_wildcards_match_literally(self, repository, make_user):
        underscored = make_user(email="under_score@x.com")
        make_user(email="plain@x.com")

        users = repository.find(build_user_query(search="_"))
        assert [u.id for u in users] == [underscored.id]
        assert repository.find(build_user_query(search="%")) == []

    def test_skip_and_limit(self, repository, make_user):
        ids = [make_user(minutes=i).id for i in range(1, 8)]
        newest_first = list(reversed(ids))

        page = repository.find(build_user_query(), skip=3, limit=3)
        assert [u.id for u in page] == newest_first[3:6]
        assert repository.find(build_user_query(), skip=30, limit=3) == []

    def test_ties_broken_by_id(self, repository, make_user):
        first = make_user(age=25)
        second = make_user(age=25)
        users = repository.find(build_user_query(sort="age:asc"))
        assert [u.id for u in users] == [first.id, second.id]


class TestCount:
    def test_count_ignores_pagination(self, repository, make_user):
        for _ in range(4):
            make_user(city="Boston")
        make_user(city="Denver")

        assert repository.count(build_user_query()) == 5
        assert repository.count(build_user_query(city="Boston")) == 4
        assert repository.count(build_user_query(city="Nowhere")) == 0


class TestGrouping:
    def test_group_by_status(self, repository, make_user):
        make_user(status="active", age=20)
        make_user(status="active", age=30)
        make_user(status="inactive", age=50)

        groups = repository.group_by_status()
        assert [(g.status, g.count, g.avg_age) for g in groups] == [("active", 2, 25.0), ("inactive", 1, 50.0)]

    def test_group_by_city_top(self, repository, make_user):
        for city, n in [("A", 1), ("B", 6), ("C", 2), ("D", 5), ("E", 3), ("F", 4)]:
            for _ in range(n):
                make_user(city=city)

        cities = repository.group_by_city(limit=5)
        assert [(c.city, c.count) for c in cities] == [("B", 6), ("D", 5), ("F", 4), ("E", 3), ("C", 2)]

    def test_grouping_on_empty_table(self, repository):
        assert repository.group_by_status() == []
        assert repository.group_by_city() == []


class TestMutation:
    def test_unique_email_enforced_by_store(self, repository, make_user):
        make_user(email="taken@x.com")
        duplicate = User(name="Dup", email="taken@x.com", address_street="1 St", address_city="X")
        with pytest.raises(IntegrityError):
            repository.create(duplicate)

    def test_delete(self, repository, make_user):
        user = make_user()
        assert repository.delete(user.id) is True
        assert repository.get_by_id(user.id) is None

    def test_delete_missing(self, repository, make_user):
        make_user()
        assert repository.delete(999) is False
        assert repository.count(build_user_query()) == 1
