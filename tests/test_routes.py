"""Tests for the Flask JSON API."""

RFC_SECRET_SHA1 = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"


def test_index_lists_endpoints(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert "POST /code" in resp.get_json()["endpoints"]


def test_code_for_bare_secret(client):
    resp = client.post("/code", json={"input": RFC_SECRET_SHA1, "digits": 8, "timestamp_ms": 59_000})
    assert resp.status_code == 200
    assert resp.get_json() == {"code": "94287082", "digits": 8, "period": 30, "elapsed": 29, "remaining": 1}


def test_code_for_uri(client):
    uri = f"otpauth://totp/ACME:alice?secret={RFC_SECRET_SHA1}&digits=8"
    resp = client.post("/code", json={"input": uri, "timestamp_ms": 1111111109_000})
    assert resp.get_json()["code"] == "07081804"


def test_code_defaults_to_now(client):
    resp = client.post("/code", json={"input": "JBSWY3DPEHPK3PXP"})
    body = resp.get_json()
    assert resp.status_code == 200
    assert len(body["code"]) == 6
    assert body["elapsed"] + body["remaining"] == 30


def test_code_requires_input(client):
    resp = client.post("/code", json={})
    assert resp.status_code == 400
    assert resp.get_json()["type"] == "BadRequest"


def test_code_requires_json_object(client):
    resp = client.post("/code", data="nope", content_type="text/plain")
    assert resp.status_code == 400


def test_code_rejects_non_numeric_timestamp(client):
    resp = client.post("/code", json={"input": "JBSWY3DP", "timestamp_ms": "soon"})
    assert resp.status_code == 400


def test_code_invalid_secret(client):
    resp = client.post("/code", json={"input": "AB1@"})
    assert resp.status_code == 400
    assert resp.get_json()["type"] == "InvalidCharacter"


def test_code_unsupported_algorithm(client):
    resp = client.post("/code", json={"input": "JBSWY3DP", "algorithm": "MD5"})
    assert resp.status_code == 400
    assert resp.get_json()["type"] == "UnsupportedAlgorithm"


def test_parse(client):
    resp = client.post("/parse", json={"uri": "otpauth://totp/GitHub:octocat?secret=JBSWY3DP&algorithm=sha256"})
    assert resp.status_code == 200
    assert resp.get_json() == {
        "secret": "JBSWY3DP",
        "algorithm": "SHA256",
        "digits": 6,
        "period": 30,
        "label": "octocat",
        "issuer": "GitHub",
    }


def test_parse_unsupported_type(client):
    resp = client.post("/parse", json={"uri": "otpauth://hotp/Foo?secret=ABC"})
    assert resp.status_code == 400
    assert resp.get_json()["type"] == "UnsupportedType"


def test_parse_missing_secret(client):
    resp = client.post("/parse", json={"uri": "otpauth://totp/Foo"})
    assert resp.get_json()["type"] == "MissingSecret"


def test_build_uri(client):
    resp = client.post("/uri", json={"secret": "jbsw y3dp", "label": "alice", "issuer": "ACME", "period": 60})
    assert resp.status_code == 200
    assert resp.get_json()["uri"] == (
        "otpauth://totp/ACME:alice?secret=JBSWY3DP&issuer=ACME&algorithm=SHA1&digits=6&period=60"
    )


def test_build_uri_defaults(client):
    resp = client.post("/uri", json={"secret": "JBSWY3DP"})
    assert resp.get_json()["uri"].startswith("otpauth://totp/2FA:Account?")


def test_build_uri_invalid_digits(client):
    resp = client.post("/uri", json={"secret": "JBSWY3DP", "digits": "six"})
    assert resp.status_code == 400
    assert resp.get_json()["type"] == "InvalidNumericParameter"


def test_cors_header(client):
    resp = client.post("/parse", json={"uri": "otpauth://totp/a?secret=JBSWY3DP"},
                       headers={"Origin": "http://example.com"})
    assert resp.headers.get("Access-Control-Allow-Origin") in ("*", "http://example.com")


def test_code_rejects_nan_timestamp(client):
    resp = client.post("/code", data='{"input": "JBSWY3DP", "timestamp_ms": NaN}',
                       content_type="application/json")
    assert resp.status_code == 400
    assert resp.get_json()["type"] == "InvalidNumericParameter"


def test_code_rejects_out_of_range_timestamp(client):
    resp = client.post("/code", json={"input": "JBSWY3DP", "timestamp_ms": 10 ** 30})
    assert resp.status_code == 400
    assert resp.get_json()["type"] == "InvalidNumericParameter"


def test_parse_invalid_percent_encoding(client):
    resp = client.post("/parse", json={"uri": "otpauth://totp/%FF%FE:bob?secret=JBSWY3DP"})
    assert resp.status_code == 400
    assert resp.get_json()["type"] == "MalformedUri"
