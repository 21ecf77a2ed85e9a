"""Test helpers shared across test modules."""


def user_payload(**overrides) -> dict:
    """A valid create-user request body."""
    payload = {
        "name": "John Doe",
        "email": "john@example.com",
        "age": 34,
        "address": {"street": "1 Elm St", "city": "Boston", "state": "MA", "zipCode": "02108"},
        "phone": "555-0100",
    }
    payload.update(overrides)
    return payload
