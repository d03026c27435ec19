import ssl

import pytest

from picobot.tls import TlsSettings, create_client_context


def _tls12_names(context):
    return [c["name"] for c in context.get_ciphers() if c["protocol"] != "TLSv1.3"]


def test_default_context_versions():
    context = create_client_context(TlsSettings())
    assert context.minimum_version == ssl.TLSVersion.TLSv1_2
    assert context.maximum_version == ssl.TLSVersion.TLSv1_3


def test_default_context_verifies_peer():
    context = create_client_context()
    assert context.verify_mode == ssl.CERT_REQUIRED
    assert context.check_hostname is True


def test_default_context_disables_tickets():
    context = create_client_context()
    assert (context.options & ssl.OP_NO_TICKET) == ssl.OP_NO_TICKET


def test_default_excludes_chacha_and_des3():
    names = _tls12_names(create_client_context())
    assert names
    assert all("CHACHA" not in name for name in names)
    assert all("DES-CBC3" not in name for name in names)


def test_ecc_only_uses_ecdhe():
    settings = TlsSettings(rsa=False, dh=False)
    names = _tls12_names(create_client_context(settings))
    assert names
    assert all("ECDHE" in name for name in names)


def test_tls13_only():
    context = create_client_context(TlsSettings(tls12=False))
    assert context.minimum_version == ssl.TLSVersion.TLSv1_3
    assert context.maximum_version == ssl.TLSVersion.TLSv1_3


def test_tls12_only():
    context = create_client_context(TlsSettings(tls13=False))
    assert context.maximum_version == ssl.TLSVersion.TLSv1_2


def test_no_verify():
    context = create_client_context(TlsSettings(verify_peer=False))
    assert context.verify_mode == ssl.CERT_NONE
    assert context.check_hostname is False


def test_no_versions_rejected():
    with pytest.raises(ValueError):
        TlsSettings(tls12=False, tls13=False)


def test_no_key_exchange_rejected():
    with pytest.raises(ValueError):
        TlsSettings(rsa=False, ecc=False, dh=False)


def test_no_cipher_rejected():
    with pytest.raises(ValueError):
        TlsSettings(aes_gcm=False, aes_cbc=False)


def test_max_rsa_key_bits_is_half_math_bits():
    settings = TlsSettings()
    assert settings.max_rsa_key_bits * 2 == settings.fp_max_bits


def test_cipher_string_excludes_disabled():
    text = TlsSettings().cipher_string()
    assert "!CHACHA20" in text
    assert "!3DES" in text
    assert "!MD5" in text