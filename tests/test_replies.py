import pytest

from apps.api.data.service_catalog import SERVICES, SERVICES_BY_KEY
from apps.api.utils.replies import (
    COMPANY_REPLY,
    CONTACT_REPLY,
    EMPTY_REPLY,
    GENERAL_REPLIES,
    GREETING_REPLY,
    SCHEDULE_REPLY,
    THANKS_REPLY,
    WARRANTY_REPLY,
    ConversationContext,
    Intent,
    detect_intent,
    detect_service,
    get_welcome_message,
    respond,
    triage,
)


@pytest.mark.parametrize("message", ["", "   ", "\n\t ", None, "\ufeff", " \ufeff\n"])
def test_blank_input_asks_to_rephrase(message):
    assert respond(message) == EMPTY_REPLY
    assert EMPTY_REPLY == "I didn't catch that. Could you please rephrase your question?"


@pytest.mark.parametrize("message", ["hi", "Hello there", "HEY, how much does interlocking cost?", "你好", "greetings, I want a quote"])
def test_greeting_wins_over_everything_else(message):
    assert respond(message) == GREETING_REPLY


@pytest.mark.parametrize("message", ["thanks!", "Thank you so much", "I appreciate it", "谢谢"])
def test_thanks_acknowledged(message):
    assert respond(message) == THANKS_REPLY


def test_cost_of_interlocking_gets_quote_framing():
    svc = SERVICES_BY_KEY["interlocking"]
    reply = respond("What is the cost of interlocking?")

    assert reply.startswith("Excellent question about Interlocking (铺砖)!")
    assert reply.endswith(svc.call_to_action)
    for benefit in svc.benefits:
        assert f"• {benefit}" in reply


def test_quote_framing_offers_estimate_before_benefits():
    svc = SERVICES_BY_KEY["polymersand"]
    reply = respond("What's the price of polymer sand?")

    assert reply.index("free estimate") < reply.index(f"• {svc.benefits[0]}")
    assert reply.endswith(svc.call_to_action)


def test_question_framing_answers_with_description():
    svc = SERVICES_BY_KEY["powerwashing"]
    reply = respond("How do you clean brick joints?")

    assert reply.startswith(f"Great question! {svc.description}")
    assert "Key benefits include:" in reply
    assert reply.endswith(svc.call_to_action)


def test_general_framing_thanks_for_interest():
    svc = SERVICES_BY_KEY["sealing"]
    reply = respond("I need sealing done")

    assert reply == (
        f"Thank you for your interest in our Paver Sealing (铺路石密封) service! {svc.description}\n\n"
        f"{svc.call_to_action}"
    )


@pytest.mark.parametrize(
    "message",
    ["can I reach you by phone", "Can I get your phone number for driveway repair", "email me about sealing", "联系电话"],
)
def test_contact_request_beats_service_detection(message):
    assert respond(message) == CONTACT_REPLY


def test_contact_block_lists_phone_email_and_area():
    assert "(416) 555-1234" in CONTACT_REPLY
    assert "info@premiumlandscaping.ca" in CONTACT_REPLY
    assert "Toronto, GTA" in CONTACT_REPLY


def test_company_warranty_and_schedule_blocks():
    assert respond("Tell me about your company") == COMPANY_REPLY
    assert respond("Do you offer a warranty") == WARRANTY_REPLY
    assert respond("保修多久") == WARRANTY_REPLY
    assert respond("When can you start") == SCHEDULE_REPLY


def test_unmatched_text_falls_back_to_generic_pool():
    for _ in range(20):
        assert respond("xyz random text") in GENERAL_REPLIES
    assert len(GENERAL_REPLIES) == 4


def test_context_is_accepted_and_ignored():
    ctx = ConversationContext(service_interest="sealing", budget="5000", timeline="June", location="Markham")
    assert respond("hi", ctx) == respond("hi")
    assert respond("Tell me about your company", ctx) == COMPANY_REPLY


def test_intent_priority():
    assert detect_intent("email me a quote") == Intent.QUOTE
    assert detect_intent("what is your phone?") == Intent.CONTACT
    assert detect_intent("how long does it take") == Intent.QUESTION
    assert detect_intent("铺砖多少钱") == Intent.QUOTE
    assert detect_intent("I like gardens") == Intent.GENERAL
    assert detect_intent(None) == Intent.GENERAL


def test_service_detection_keeps_declaration_order():
    # "driveway" is a keyword of both interlocking and relevelling
    assert detect_service("my driveway is sunken") == "interlocking"
    assert detect_service("the joints need polymeric sand") == "polymersand"
    assert detect_service("花园设计") == "yardworks"
    assert detect_service("nothing relevant") is None


def test_catalog_has_six_services_in_order():
    assert [s.key for s in SERVICES] == [
        "interlocking", "powerwashing", "relevelling", "polymersand", "sealing", "yardworks",
    ]
    with pytest.raises(Exception):
        SERVICES[0].call_to_action = "changed"


def test_welcome_message_is_stable_and_lists_services():
    first = get_welcome_message()
    assert first == get_welcome_message() == get_welcome_message()
    assert first.startswith("Welcome to Premium Landscaping Services! 👋")
    for i, svc in enumerate(SERVICES, start=1):
        assert f"{i}. **{svc.title_en}**" in first


@pytest.mark.parametrize(
    "message, expected",
    [
        ("hi, what's the price?", (Intent.GENERAL, None)),
        ("Thanks! How much for sealing?", (Intent.GENERAL, None)),
        ("", (Intent.GENERAL, None)),
        ("What does sealing cost?", (Intent.QUOTE, "sealing")),
        ("How do you fix a sunken walkway?", (Intent.QUESTION, "relevelling")),
    ],
)
def test_triage_follows_the_reply_rules(message, expected):
    assert triage(message) == expected
