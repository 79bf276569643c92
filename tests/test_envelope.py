"""Response envelopes and error unification."""

import pytest
from pydantic import BaseModel

from cpanel_api.args import Generation
from cpanel_api.errors import RemoteCallFailure, ResponseDecodeError
from cpanel_api.models.envelope import API1Response, API2Response, UAPIResponse
from cpanel_api.transport.envelope import decode_payload, finish_call, parse_envelope, unify


class TestUAPIEnvelope:
    def test_success_with_message(self):
        env = parse_envelope(Generation.UAPI, {"status": 1, "errors": [], "messages": ["ok"]})
        assert isinstance(env, UAPIResponse)
        assert unify(env) is None
        assert env.message() == "ok"
        assert env.ok

    def test_errors_joined_by_newline(self):
        env = parse_envelope(Generation.UAPI, {"status": 0, "errors": ["first", "second"]})
        err = unify(env)
        assert isinstance(err, RemoteCallFailure)
        assert str(err) == "first\nsecond"

    @pytest.mark.parametrize("errors", [[], None])
    def test_failure_without_errors_is_unknown(self, errors):
        env = parse_envelope(Generation.UAPI, {"status": 0, "errors": errors})
        assert str(unify(env)) == "Unknown"

    def test_status_other_than_one_fails(self):
        env = parse_envelope(Generation.UAPI, {"status": 2, "errors": ["partial"]})
        assert str(unify(env)) == "partial"

    def test_messages_independent_of_failure(self):
        env = parse_envelope(Generation.UAPI, {"status": 0, "errors": ["no"], "messages": ["a", "b"]})
        assert env.message() == "a\nb"

    def test_no_messages(self):
        env = parse_envelope(Generation.UAPI, {"status": 1, "messages": None})
        assert env.message() is None

    def test_wrapped_result_is_flattened(self):
        env = parse_envelope(Generation.UAPI, {
            "apiversion": 3,
            "module": "Email",
            "func": "list_pops",
            "result": {"status": 1, "errors": None, "data": [{"email": "a@example.com"}]},
        })
        assert env.apiversion == 3
        assert env.module == "Email"
        assert env.func == "list_pops"
        assert env.payload == [{"email": "a@example.com"}]
        assert unify(env) is None


class TestAPI2Envelope:
    def test_failure_reason(self):
        env = parse_envelope(Generation.API2, {"cpanelresult": {"event": {"result": 0, "reason": "bad user"}}})
        assert isinstance(env, API2Response)
        assert str(unify(env)) == "bad user"

    def test_success_payload(self):
        env = parse_envelope(Generation.API2, {
            "cpanelresult": {"event": {"result": 1}, "data": [{"domain": "example.com"}], "module": "Park"},
        })
        assert unify(env) is None
        assert env.payload == [{"domain": "example.com"}]
        assert env.cpanelresult.module == "Park"

    def test_missing_reason_is_unknown(self):
        env = parse_envelope(Generation.API2, {"cpanelresult": {"event": {"result": 0}}})
        assert str(unify(env)) == "Unknown"

    def test_missing_event_is_failure(self):
        env = parse_envelope(Generation.API2, {})
        assert str(unify(env)) == "Unknown"


class TestAPI1Envelope:
    def test_event_reason_when_no_top_level_error(self):
        env = parse_envelope(Generation.API1, {
            "error": "", "event": {"result": 0, "reason": "disk full"}, "data": {"result": ""},
        })
        assert isinstance(env, API1Response)
        assert str(unify(env)) == "disk full"

    def test_top_level_error_takes_precedence(self):
        env = parse_envelope(Generation.API1, {
            "error": "Access denied", "event": {"result": 0, "reason": "Access denied (event)"},
        })
        assert str(unify(env)) == "Access denied"

    def test_top_level_error_fails_even_if_event_succeeds(self):
        env = parse_envelope(Generation.API1, {"error": "oops", "event": {"result": 1}})
        assert str(unify(env)) == "oops"

    def test_success(self):
        env = parse_envelope(Generation.API1, {
            "apiversion": "1",
            "type": "event",
            "module": "Serverinfo",
            "func": "servicestatus",
            "source": "module",
            "data": {"result": "<table>...</table>"},
            "event": {"result": 1},
        })
        assert unify(env) is None
        assert env.payload == "<table>...</table>"
        assert env.module == "Serverinfo"

    def test_null_error_and_missing_reason(self):
        env = parse_envelope(Generation.API1, {"error": None, "event": {"result": 0}})
        assert str(unify(env)) == "Unknown"

    def test_numeric_apiversion(self):
        env = parse_envelope(Generation.API1, {"apiversion": 1, "event": {"result": 1}})
        assert env.apiversion == "1"


class TestParseEnvelope:
    def test_rejects_non_object(self):
        with pytest.raises(ResponseDecodeError):
            parse_envelope(Generation.UAPI, ["not", "an", "object"])

    def test_rejects_schema_mismatch(self):
        with pytest.raises(ResponseDecodeError):
            parse_envelope(Generation.UAPI, {"status": "yes please"})

    def test_variants_are_tagged(self):
        assert parse_envelope(Generation.UAPI, {}).generation is Generation.UAPI
        assert parse_envelope(Generation.API2, {}).generation is Generation.API2
        assert parse_envelope(Generation.API1, {}).generation is Generation.API1


class Mailbox(BaseModel):
    email: str
    diskquota: str = "unlimited"


class TestDecodePayload:
    def test_raw_payload(self):
        env = parse_envelope(Generation.UAPI, {"status": 1, "data": {"email": "a@example.com"}})
        assert decode_payload(env) == {"email": "a@example.com"}

    def test_into_model(self):
        env = parse_envelope(Generation.UAPI, {"status": 1, "data": {"email": "a@example.com"}})
        box = decode_payload(env, Mailbox)
        assert isinstance(box, Mailbox)
        assert box.email == "a@example.com"
        assert box.diskquota == "unlimited"

    def test_model_mismatch(self):
        env = parse_envelope(Generation.UAPI, {"status": 1, "data": {"nope": 1}})
        with pytest.raises(ResponseDecodeError):
            decode_payload(env, Mailbox)


class TestFinishCall:
    def test_raises_unified_error_with_call_details(self):
        with pytest.raises(RemoteCallFailure) as exc_info:
            finish_call(Generation.API2, {"cpanelresult": {"event": {"result": 0, "reason": "bad user"}}},
                        "Email", "addpop")
        assert exc_info.value.reason == "bad user"
        assert exc_info.value.details == {"generation": "API2", "module": "Email", "function": "addpop"}

    def test_logs_uapi_messages(self, caplog):
        with caplog.at_level("WARNING", logger="cpanel_api.transport.envelope"):
            result = finish_call(Generation.UAPI, {"status": 1, "messages": ["quota nearly full"], "data": 7},
                                 "Quota", "get_quota_info")
        assert result == 7
        assert "quota nearly full" in caplog.text


class TestNullRecords:
    @pytest.mark.parametrize("generation,raw,expected", [
        (Generation.API1, {"error": "Access denied", "event": None}, "Access denied"),
        (Generation.API1, {"error": "", "event": None, "data": None}, "Unknown"),
        (Generation.API2, {"cpanelresult": {"event": None}}, "Unknown"),
        (Generation.API2, {"cpanelresult": None}, "Unknown"),
        (Generation.API2, {"cpanelresult": {"event": {"result": None, "reason": "bad user"}}}, "bad user"),
        (Generation.UAPI, {"status": None}, "Unknown"),
    ])
    def test_null_decodes_as_failure(self, generation, raw, expected):
        assert str(unify(parse_envelope(generation, raw))) == expected

    def test_null_data_on_success(self):
        env = parse_envelope(Generation.API1, {"error": "", "event": {"result": 1}, "data": None})
        assert unify(env) is None
        assert env.payload is None


class TestSuccessIgnoresReasons:
    @pytest.mark.parametrize("generation,raw", [
        (Generation.UAPI, {"status": 1, "errors": ["x"]}),
        (Generation.API2, {"cpanelresult": {"event": {"result": 1, "reason": "r"}}}),
        (Generation.API1, {"error": "", "event": {"result": 1, "reason": "r"}}),
    ])
    def test_success(self, generation, raw):
        env = parse_envelope(generation, raw)
        assert unify(env) is None
        assert env.ok


def test_uapi_warnings_are_logged(caplog):
    with caplog.at_level("WARNING", logger="cpanel_api.transport.envelope"):
        finish_call(Generation.UAPI, {"status": 1, "warnings": ["domain is parked"]}, "Park", "park")
    assert "Park::park: domain is parked" in caplog.text
