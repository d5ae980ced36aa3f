from weighin.images import approx_base64_bytes, encode_image, strip_data_url


def test_strip_data_url():
    assert strip_data_url("data:image/jpeg;base64,aGVsbG8=") == "aGVsbG8="
    assert strip_data_url("aGVsbG8=") == "aGVsbG8="


def test_approx_base64_bytes_accounts_for_padding():
    assert approx_base64_bytes("aGVsbG8=") == 5
    assert approx_base64_bytes("data:image/png;base64,aGVsbG8gd29ybGQ=") == 11
    assert approx_base64_bytes("") == 0


def test_encode_image(tmp_path):
    path = tmp_path / "scale.jpg"
    path.write_bytes(b"hello")
    assert encode_image(path) == "aGVsbG8="
