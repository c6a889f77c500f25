import pytest

from credstore.services.token_cipher import TokenCipherService


def test_token_cipher_roundtrip() -> None:
    cipher = TokenCipherService(secret="super-secret-key")
    plaintext = b'{"access_token":"sensitive-token"}'

    encrypted = cipher.encrypt(plaintext)
    assert encrypted != plaintext

    assert cipher.decrypt(encrypted) == plaintext


def test_token_cipher_rejects_bad_ciphertext() -> None:
    cipher = TokenCipherService(secret="another-secret")

    with pytest.raises(ValueError):
        cipher.decrypt(b"not-valid")


def test_token_cipher_rejects_ciphertext_from_other_secret() -> None:
    encrypted = TokenCipherService(secret="first").encrypt(b"payload")

    with pytest.raises(ValueError):
        TokenCipherService(secret="second").decrypt(encrypted)


def test_token_cipher_requires_secret() -> None:
    with pytest.raises(ValueError):
        TokenCipherService(secret="")
