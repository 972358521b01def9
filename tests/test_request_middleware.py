"""Tests for request logging middleware helpers."""

import pytest

from feedback_service.middleware import operation_name_from_payload, sanitize_query_params


def test_sanitize_query_params_redacts_sensitive_keys():
    params = {"access_token": "abc", "page": "2", "X-Api-Key": "k"}

    sanitized = sanitize_query_params(params)

    assert sanitized == {"access_token": "[REDACTED]", "page": "2", "X-Api-Key": "[REDACTED]"}


@pytest.mark.parametrize(
    "payload,expected",
    [
        ({"operationName": "Pending", "query": "query Other { me { email } }"}, "Pending"),
        ({"query": "query Pending { unansweredForm { id } }"}, "Pending"),
        ({"query": "mutation Send($a: FeedbackAnswerInput!) { x }"}, "mutation:Send"),
        ({"query": "{ me { email } }"}, "unnamed_operation"),
        ({"query": "query IntrospectionQuery { __schema { types { name } } }"}, "__introspection"),
        ({}, None),
    ],
)
def test_operation_name_from_payload(payload, expected):
    assert operation_name_from_payload(payload) == expected
