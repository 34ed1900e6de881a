from __future__ import annotations

import random
from enum import Enum

from pydantic import BaseModel

from apps.api.data.service_catalog import COMPANY, SERVICES, SERVICES_BY_KEY


class Intent(str, Enum):
    QUESTION = "question"
    QUOTE = "quote"
    CONTACT = "contact"
    GENERAL = "general"


class ConversationContext(BaseModel):
    # accepted for forward compatibility; nothing reads it yet
    service_interest: str | None = None
    budget: str | None = None
    timeline: str | None = None
    location: str | None = None
    previous_questions: list[str] = []


GREETING_TOKENS = ["hello", "hi", "hey", "greetings", "你好", "嗨", "喂"]
THANKS_TOKENS = ["thank", "thanks", "appreciate", "谢谢", "感谢"]

QUOTE_TOKENS = ["quote", "报价", "price", "cost", "estimate", "多少钱", "价格"]
CONTACT_TOKENS = ["contact", "phone", "email", "联系", "电话", "邮箱"]
QUESTION_TOKENS = ["?", "？", "how", "what", "when", "why", "怎样", "什么", "为什么"]

COMPANY_TOKENS = ["company", "about", "公司", "关于"]
WARRANTY_TOKENS = ["warranty", "guarantee", "保修", "保证"]
SCHEDULE_TOKENS = ["when", "schedule", "timeline", "什么时候", "日期"]

EMPTY_REPLY = "I didn't catch that. Could you please rephrase your question?"

GREETING_REPLY = (
    f"Hello! Welcome to {COMPANY['name']}! 👋 How can I assist you today? "
    "Feel free to ask about any of our services or request a free quote!"
)

THANKS_REPLY = (
    "You're welcome! We're always happy to help. "
    "Is there anything else you'd like to know about our services?"
)

CONTACT_REPLY = f"""We'd love to hear from you! Here are the best ways to reach us:

📞 Phone: {COMPANY['phone']}
   Call us anytime for immediate assistance

📧 Email: {COMPANY['email']}
   Send us your project details

📍 Service Area: {COMPANY['service_area']}
   We serve the greater Toronto area

You can also fill out the contact form on our website to request a free quote. Our team typically responds within 24 hours!"""

COMPANY_REPLY = f"""{COMPANY['name']} is a trusted landscaping company serving the Toronto and GTA area. With over {COMPANY['years']} years of experience, we specialize in:

✓ Professional interlocking installation
✓ Power washing and cleaning
✓ Driveway repair and relevelling
✓ Polymer sand installation
✓ Paver sealing and protection
✓ Complete yard works and landscaping

Our team is certified, professional, and committed to exceeding customer expectations. Would you like to learn more about any specific service?"""

WARRANTY_REPLY = """Great question! We stand behind our work with quality guarantees on all our services. Our commitment includes:

✓ Professional installation
✓ Premium materials
✓ Attention to detail
✓ Customer satisfaction guarantee

For specific warranty details on your project, we'd love to discuss this during your free consultation. Would you like to schedule one?"""

SCHEDULE_REPLY = """Project timelines depend on the scope and complexity of your work. During your free consultation, we'll discuss:

• Your preferred timeline
• Project complexity
• Seasonal considerations
• Weather conditions
• Our current schedule

We aim to complete projects efficiently while maintaining our high quality standards. When would be a good time to discuss your project?"""

WELCOME_SUMMARIES = {
    "interlocking": "Professional paver installation",
    "powerwashing": "Cleaning and maintenance",
    "relevelling": "Driveway repair and leveling",
    "polymersand": "Joint filling and weed prevention",
    "sealing": "Protection and maintenance",
    "yardworks": "Complete landscaping solutions",
}

GENERAL_REPLIES = (
    "That's a great point! At Premium Landscaping, we pride ourselves on quality workmanship and customer satisfaction. Is there a specific service you'd like to learn more about?",
    f"I appreciate your interest! We've been serving the Toronto area for over {COMPANY['years']} years with professional landscaping solutions. What can I help you with today?",
    "Absolutely! Our team is experienced in all aspects of landscaping. Would you like to discuss a specific project or service?",
    "That sounds interesting! We'd love to help bring your vision to life. Which of our services would be most beneficial for your project?",
)


def _contains_any(text: str, tokens: list[str]) -> bool:
    return any(t in text for t in tokens)


def detect_intent(message: str | None) -> Intent:
    text = (message or "").lower()
    if _contains_any(text, QUOTE_TOKENS):
        return Intent.QUOTE
    if _contains_any(text, CONTACT_TOKENS):
        return Intent.CONTACT
    if _contains_any(text, QUESTION_TOKENS):
        return Intent.QUESTION
    return Intent.GENERAL


def detect_service(message: str | None) -> str | None:
    """Return the key of the first catalog service with any keyword in the message.

    Catalog order decides ties: "driveway" is listed for interlocking and
    relevelling, and interlocking wins because it is declared first.
    """
    text = (message or "").lower()
    for svc in SERVICES:
        if any(k in text for k in svc.keywords):
            return svc.key
    return None


def _bullets(items) -> str:
    return "\n".join(f"• {b}" for b in items)


def build_service_reply(service_key: str, intent: Intent) -> str:
    svc = SERVICES_BY_KEY[service_key]

    if intent == Intent.QUOTE:
        return (
            f"Excellent question about {svc.name}! We'd be happy to provide a free estimate. "
            "Our team will assess your specific needs and provide a detailed quote. "
            f"Here are some key benefits of our {svc.name} service:\n\n"
            f"{_bullets(svc.benefits)}\n\n"
            f"{svc.call_to_action}"
        )

    if intent == Intent.QUESTION:
        return (
            f"Great question! {svc.description}\n\n"
            "Key benefits include:\n"
            f"{_bullets(svc.benefits)}\n\n"
            f"{svc.call_to_action}"
        )

    return (
        f"Thank you for your interest in our {svc.name} service! {svc.description}\n\n"
        f"{svc.call_to_action}"
    )


def _normalize(message: str | None) -> str:
    # browsers can leave a byte order mark in pasted text
    return (message or "").strip().strip("\ufeff").strip().lower()


def triage(message: str | None) -> tuple[Intent, str | None]:
    """Intent and service behind the reply `respond` gives.

    Blank, greeting and thanks messages are answered before any classification,
    so they report a general intent with no service.
    """
    text = _normalize(message)
    if not text or _contains_any(text, GREETING_TOKENS) or _contains_any(text, THANKS_TOKENS):
        return Intent.GENERAL, None
    return detect_intent(text), detect_service(text)


def respond(message: str | None, context: ConversationContext | None = None) -> str:
    text = _normalize(message)
    if not text:
        return EMPTY_REPLY

    if _contains_any(text, GREETING_TOKENS):
        return GREETING_REPLY

    if _contains_any(text, THANKS_TOKENS):
        return THANKS_REPLY

    intent = detect_intent(text)
    service_key = detect_service(text)

    # contact requests win even when a service is mentioned
    if intent == Intent.CONTACT:
        return CONTACT_REPLY

    if service_key:
        return build_service_reply(service_key, intent)

    if _contains_any(text, COMPANY_TOKENS):
        return COMPANY_REPLY

    if _contains_any(text, WARRANTY_TOKENS):
        return WARRANTY_REPLY

    if _contains_any(text, SCHEDULE_TOKENS):
        return SCHEDULE_REPLY

    return random.choice(GENERAL_REPLIES)


def get_welcome_message() -> str:
    lines = "\n".join(
        f"{i}. **{svc.title_en}** - {WELCOME_SUMMARIES[svc.key]}"
        for i, svc in enumerate(SERVICES, start=1)
    )
    return (
        f"Welcome to {COMPANY['name']}! 👋\n\n"
        "We specialize in six core services:\n"
        f"{lines}\n\n"
        "Which service interests you most? I'm here to help! 😊"
    )
