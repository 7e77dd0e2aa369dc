from ai_assistant.constants import SYSTEM_PROMPT
from ai_assistant.schemas.requests import AiAskRequest, AiChatRequest
from ai_assistant.services.self_hosted_client import build_ask_ai_prompt, convert_payload_to_messages


def user_content(payload):
    messages = convert_payload_to_messages(AiChatRequest(payload=payload))
    assert messages[0] == {"role": "system", "content": SYSTEM_PROMPT}
    return [m["content"] for m in messages[1:]]


def test_message_field_is_used_first():
    assert user_content({"message": "Hi", "question": "ignored"}) == ["Hi"]


def test_question_field_is_used_when_message_is_missing():
    assert user_content({"question": "What is a trigger?"}) == ["What is a trigger?"]


def test_empty_message_falls_through_to_question():
    assert user_content({"message": "", "question": "Why?"}) == ["Why?"]


def test_other_objects_are_serialized_compactly():
    assert user_content({"type": "init", "user": {"firstName": "Ana"}}) == [
        '{"type":"init","user":{"firstName":"Ana"}}'
    ]


def test_empty_object_is_still_sent():
    assert user_content({}) == ["{}"]


def test_list_payload_is_serialized():
    assert user_content([1, "two"]) == ['[1,"two"]']


def test_missing_or_scalar_payload_sends_only_system_message():
    assert user_content(None) == []
    assert user_content("just a string") == []


def test_ask_prompt_with_full_context():
    payload = AiAskRequest(
        question="How do I use the HTTP node?",
        context={
            "schema": [
                {"nodeName": "HTTP Request", "schema": {"type": "object", "value": "a"}},
                {"nodeName": "Set", "schema": {"type": "string"}},
            ],
            "inputSchema": {"nodeName": "HTTP Request", "schema": {"type": "object", "value": "b"}},
            "pushRef": "push123",
            "ndvPushRef": "ndv123",
        },
        forNode="HTTP Request",
    )

    assert build_ask_ai_prompt(payload) == (
        "Question: How do I use the HTTP node?\n\n"
        "Context:\n"
        "Available nodes and their schemas:\n"
        '- HTTP Request: {"type":"object","value":"a"}\n'
        '- Set: {"type":"string"}\n'
        'Input schema for HTTP Request: {"type":"object","value":"b"}\n'
        "\nFor node: HTTP Request\n\n"
        "Please provide a helpful answer for this n8n workflow automation question."
    )


def test_ask_prompt_keeps_header_for_empty_schema_list():
    payload = AiAskRequest(question="Q", context={"schema": []}, forNode="Code")

    assert build_ask_ai_prompt(payload) == (
        "Question: Q\n\n"
        "Context:\n"
        "Available nodes and their schemas:\n"
        "\nFor node: Code\n\n"
        "Please provide a helpful answer for this n8n workflow automation question."
    )


def test_ask_prompt_without_context():
    payload = AiAskRequest(question="Q", for_node="Code")

    prompt = build_ask_ai_prompt(payload)

    assert "Context:" not in prompt
    assert prompt.startswith("Question: Q\n\n\nFor node: Code\n\n")


def test_empty_containers_in_message_are_sent_as_is():
    assert user_content({"message": [], "question": "ignored"}) == [[]]
    assert user_content({"message": {}}) == [{}]


def test_zero_and_false_messages_fall_through():
    assert user_content({"message": 0, "question": "Why?"}) == ["Why?"]
    assert user_content({"message": False}) == ['{"message":false}']


def test_schema_numbers_match_json_stringify():
    payload = AiAskRequest(
        question="Q",
        context={"inputSchema": {"nodeName": "Set", "schema": {"version": 1.0, "ratio": 0.5}}},
        forNode="Set",
    )

    assert 'Input schema for Set: {"version":1,"ratio":0.5}\n' in build_ask_ai_prompt(payload)


def test_missing_node_schema_prints_undefined():
    payload = AiAskRequest(
        question="Q",
        context={"schema": [{"nodeName": "Code"}, {"nodeName": "Set", "schema": None}]},
        forNode="Code",
    )

    prompt = build_ask_ai_prompt(payload)

    assert "- Code: undefined\n" in prompt
    assert "- Set: null\n" in prompt
