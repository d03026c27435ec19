"""TLS client settings and the SSL context built from them."""

from __future__ import annotations

import ssl
from dataclasses import dataclass

__all__ = ["TlsSettings", "create_client_context"]


@dataclass(frozen=True)
class TlsSettings:
    """Protocol versions, key exchanges and ciphers the client may use."""

    tls12: bool = True
    tls13: bool = True
    sni: bool = True
    verify_peer: bool = True
    rsa: bool = True
    ecc: bool = True
    dh: bool = True
    aes_gcm: bool = True
    aes_cbc: bool = True
    chacha: bool = False
    des3: bool = False
    md5: bool = False
    session_cache: bool = False
    fp_max_bits: int = 4096

    def __post_init__(self) -> None:
        if not (self.tls12 or self.tls13):
            raise ValueError("at least one of TLS 1.2 and TLS 1.3 must be enabled")
        if self.tls12:
            if not (self.rsa or self.ecc or self.dh):
                raise ValueError("TLS 1.2 needs at least one key exchange")
            if not (self.aes_gcm or self.aes_cbc or self.chacha or self.des3):
                raise ValueError("TLS 1.2 needs at least one cipher")
        if self.fp_max_bits <= 0:
            raise ValueError("maximum math bits must be positive")

    @property
    def max_rsa_key_bits(self) -> int:
        """Largest RSA key the math settings allow."""
        return self.fp_max_bits // 2

    def cipher_string(self) -> str:
        """OpenSSL cipher list for TLS 1.2 suites."""
        exchanges = []
        if self.ecc:
            exchanges.append("ECDHE")
        if self.dh:
            exchanges.append("DHE")
        if self.rsa:
            exchanges.append("kRSA")
        ciphers = []
        if self.aes_gcm:
            ciphers.append("AESGCM")
        if self.aes_cbc:
            ciphers.append("AES")
        if self.chacha:
            ciphers.append("CHACHA20")
        if self.des3:
            ciphers.append("3DES")
        parts = [f"{kx}+{enc}" for kx in exchanges for enc in ciphers]
        exclusions = ["!aNULL", "!eNULL", "!RC4", "!PSK", "!DSS"]
        if not self.chacha:
            exclusions.append("!CHACHA20")
        if not self.des3:
            exclusions.append("!3DES")
        if not self.md5:
            exclusions.append("!MD5")
        if not self.aes_cbc:
            exclusions.append("!SHA1")
        return ":".join(parts + exclusions)


def create_client_context(settings: TlsSettings | None = None) -> ssl.SSLContext:
    """Build a client-side SSL context restricted to ``settings``."""
    settings = settings or TlsSettings()
    context = ssl.create_default_context(ssl.Purpose.SERVER_AUTH)
    context.minimum_version = (
        ssl.TLSVersion.TLSv1_2 if settings.tls12 else ssl.TLSVersion.TLSv1_3
    )
    context.maximum_version = (
        ssl.TLSVersion.TLSv1_3 if settings.tls13 else ssl.TLSVersion.TLSv1_2
    )
    if settings.tls12:
        try:
            context.set_ciphers(settings.cipher_string())
        except ssl.SSLError as exc:
            raise ValueError(f"no usable cipher for these settings: {exc}") from exc
    if not settings.session_cache:
        context.options |= ssl.OP_NO_TICKET
    if settings.verify_peer:
        context.check_hostname = settings.sni
        context.verify_mode = ssl.CERT_REQUIRED
    else:
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    return context