"""샘플 데이터 시드 테스트."""

from app.seed import SAMPLE_PASSENGER_ID, seed_sample_data


def test_seed_is_idempotent(session_factory, repository) -> None:
    assert seed_sample_data(session_factory) is False

    destinations = repository.list_active_destinations()
    assert [destination.city for destination in destinations] == [
        "Barcelona",
        "Cartagena",
        "Dubai",
        "Panama City",
        "Tokyo",
    ]


def test_sample_profile_is_available(repository) -> None:
    profile = repository.get_preference(SAMPLE_PASSENGER_ID)

    assert profile is not None
    assert profile.budget_preference == "MODERATE"
    assert "ARCHITECTURE" in profile.interests
