"""Reversible, keyed encoding of upstream URLs into query-safe tokens.

Tokens are AES-SIV ciphertexts: the same URL always produces the same token
under one key, and any modification of the token fails authentication.
"""
import base64
import binascii
import hashlib

from Crypto.Cipher import AES

from tvgate.errors import MalformedToken, DecodeFailure

TAG_SIZE = 16


class URLCodec:

    def __init__(self, secret):
        if isinstance(secret, str):
            secret = secret.encode('utf-8')
        # SHA-512 gives the 64 byte double key AES-256-SIV expects
        self._key = hashlib.sha512(secret).digest()

    def _cipher(self):
        return AES.new(self._key, AES.MODE_SIV)

    def encode(self, url):
        ciphertext, tag = self._cipher().encrypt_and_digest(url.encode('utf-8'))
        return base64.urlsafe_b64encode(tag + ciphertext).rstrip(b'=').decode('ascii')

    def decode(self, token):
        if not token:
            raise MalformedToken("empty token")
        try:
            padded = token + '=' * (-len(token) % 4)
            raw = base64.b64decode(padded, altchars=b'-_', validate=True)
        except (binascii.Error, ValueError) as e:
            raise MalformedToken(f"token is not valid base64: {e}") from e
        # Unused low bits of the last character are ignored by the decoder
        if base64.urlsafe_b64encode(raw).rstrip(b'=').decode('ascii') != token:
            raise MalformedToken("token is not canonically encoded")
        if len(raw) <= TAG_SIZE:
            raise MalformedToken("token too short")

        tag, ciphertext = raw[:TAG_SIZE], raw[TAG_SIZE:]
        try:
            plaintext = self._cipher().decrypt_and_verify(ciphertext, tag)
            return plaintext.decode('utf-8')
        except ValueError as e:
            # UnicodeDecodeError is a ValueError too
            raise DecodeFailure("token failed verification") from e
