"""English/Arabic strings for the intake form and navigation.

Keys are dotted paths ("contact.form.fullName"). Lookups fall back to English
and then to the key itself, so a missing translation never raises.
"""

from typing import Any

DEFAULT_LANGUAGE = "en"
SUPPORTED_LANGUAGES: tuple[str, ...] = ("en", "ar")
RTL_LANGUAGES = frozenset({"ar"})

TRANSLATIONS: dict[str, dict[str, Any]] = {
    "en": {
        "nav": {
            "home": "Home",
            "caseStudies": "Case Studies",
            "about": "About Doctor",
            "tools": "Tools",
            "blogs": "Blogs",
            "faq": "FAQ",
            "contact": "Contact Us",
        },
        "contact": {
            "title": "Book an Appointment",
            "subtitle": "Get in Touch",
            "description": "Fill out the form below and we'll get back to you as soon as possible",
            "form": {
                "fullName": "Full Name",
                "mobile": "Mobile Number",
                "address": "Address",
                "message": "Message (Optional)",
                "submit": "Send Message",
                "submitting": "Sending...",
            },
            "location": "View Clinic Location",
            "workingHours": "Working Hours",
            "phone": "Phone Number",
            "toast": {
                "successTitle": "Message Sent!",
                "successDescription": "We will get back to you soon.",
                "errorTitle": "Error",
                "errorDescription": "Failed to submit. Please try again.",
            },
        },
    },
    "ar": {
        "nav": {
            "home": "الرئيسية",
            "caseStudies": "حالات سريرية",
            "about": "عن الطبيب",
            "tools": "الأدوات",
            "blogs": "المدونة",
            "faq": "الأسئلة الشائعة",
            "contact": "تواصل معنا",
        },
        "contact": {
            "title": "احجز موعد",
            "subtitle": "تواصل معنا",
            "description": "املأ النموذج أدناه وسنتواصل معك في أقرب وقت ممكن",
            "form": {
                "fullName": "الاسم الكامل",
                "mobile": "رقم الجوال",
                "address": "العنوان",
                "message": "الرسالة (اختياري)",
                "submit": "إرسال الرسالة",
                "submitting": "جاري الإرسال...",
            },
            "location": "عرض موقع العيادة",
            "workingHours": "ساعات العمل",
            "phone": "رقم الهاتف",
            "toast": {
                "successTitle": "تم الإرسال بنجاح",
                "successDescription": "سنتواصل معك قريباً",
                "errorTitle": "خطأ",
                "errorDescription": "فشل في الإرسال. حاول مرة أخرى.",
            },
        },
    },
}


def normalize_language(language: str | None) -> str:
    """Map a language tag like "ar-SA" to a supported language code."""
    if not language:
        return DEFAULT_LANGUAGE
    code = language.split("-")[0].lower()
    return code if code in SUPPORTED_LANGUAGES else DEFAULT_LANGUAGE


def _lookup(tree: dict[str, Any], key: str) -> str | None:
    node: Any = tree
    for part in key.split("."):
        if not isinstance(node, dict) or part not in node:
            return None
        node = node[part]
    return node if isinstance(node, str) else None


def translate(key: str, language: str | None = None) -> str:
    """Translate a dotted key.

    Example:
        >>> translate("contact.form.submit", "ar")
        'إرسال الرسالة'
    """
    lang = normalize_language(language)
    return (
        _lookup(TRANSLATIONS[lang], key)
        or _lookup(TRANSLATIONS[DEFAULT_LANGUAGE], key)
        or key
    )


def is_rtl(language: str | None) -> bool:
    return normalize_language(language) in RTL_LANGUAGES
