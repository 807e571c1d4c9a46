"""Key material shared by the piknik tests."""

# Keys from the reference server's test script (32-byte hex strings)
PSK_HEX = "627ea393638048bc0d5a7554ab58e41e5601e2f4975a214dfc53b500be462a9a"
SIGN_SK_HEX = "7599dad4726247d301c00ce0dc0dbfb9144fa958b4e9db30209a8f9d840ac9ca"
SIGN_PK_HEX = "c2e46983e667a37d7d8d69679f40f3a05eb8086337693d91dcaf8546d39ddb5e"
ENCRYPT_SK_HEX = "f313e1fd4ad5fee8841d40ca3d54e14041eb05bf7f4888ad8c800ceb61942db6"

PSK = bytes.fromhex(PSK_HEX)
SIGN_SK = bytes.fromhex(SIGN_SK_HEX)
SIGN_PK = bytes.fromhex(SIGN_PK_HEX)
ENCRYPT_SK = bytes.fromhex(ENCRYPT_SK_HEX)

# Clipboard contents covering edge cases
TEST_CONTENTS = {
    "empty": b"",
    "single_byte": b"X",
    "text": b"hello piknik",
    "utf8": "Café ☕ 你好".encode("utf-8"),
    "binary": bytes(range(256)),
    "large": b"The quick brown fox jumps over the lazy dog. " * 5000,
}

# RFC 7693 Appendix A: BLAKE2b-512("abc")
BLAKE2B_ABC_HEX = (
    "ba80a53f981c4d0d6a2797b69f12f6e94c212f14685ac4b74b12bb6fdbffa2d1"
    "7d87c5392aab792dc252d5de4533cc9518d38aa8dbf1925ab92386edd4009923"
)

# draft-irtf-cfrg-xchacha section 2.2.1: HChaCha20 test vector
HCHACHA20_KEY = bytes(range(32))
HCHACHA20_NONCE = bytes.fromhex("000000090000004a0000000031415927")
HCHACHA20_OUTPUT_HEX = "82413b4227b27bfed30e42508a877d73a0f9e4d58a74a853c12ec41326d3ecdc"
