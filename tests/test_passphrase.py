import pytest

from pdfsync.core.passphrase import PassphraseManager


def test_generated_passphrase_has_64_bits():
    manager = PassphraseManager()
    assert len(manager.current) == 16
    int(manager.current, 16)


def test_rotate_invalidates_previous_value():
    manager = PassphraseManager(initial="abc123")
    assert manager.matches("abc123")
    new = manager.rotate()
    assert new != "abc123"
    assert not manager.matches("abc123")
    assert manager.matches(new)


@pytest.mark.parametrize("claimed", [None, "", 123, "ABC123", "abc1234"])
def test_matches_rejects_non_matching_values(claimed):
    assert not PassphraseManager(initial="abc123").matches(claimed)


def test_too_few_bytes_rejected():
    with pytest.raises(ValueError):
        PassphraseManager(nbytes=4)
