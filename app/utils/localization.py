"""
Localized response messages.

Messages are looked up by key; the language is picked from the
request's Accept-Language header.
"""

from typing import Dict, Optional

from fastapi import Request

MESSAGES: Dict[str, Dict[str, str]] = {
    "en": {
        "ValidationFailed": "Validation failed",
        "UsernameRequired": "Username is Required",
        "UsernameTooShort": "Username must be at least 3 characters long",
        "PasswordRequired": "Password is required",
        "PasswordTooWeak": (
            "Password must be at least 8 characters long and contain an uppercase letter, "
            "a lowercase letter, a digit and a special character (! ? * .)"
        ),
        "UsernameAlreadyExists": "Username already exists",
        "UserRegisteredSuccessfully": "User registered successfully",
        "InvalidCredentials": "Invalid username or password",
        "AccountLocked": "Account is locked. Please try again in {minutes} minute(s).",
        "LoginSuccessful": "Login successful",
        "CityNameRequired": "City name is required",
        "WeatherDataNotFound": "Weather data not found for the specified city",
        "WeatherDataRetrievedSuccessfully": "Weather data retrieved successfully",
        "Unauthorized": "Authentication is required to access this resource",
        "InvalidToken": "Invalid or expired token",
        "TooManyRequests": "Too many requests. Please try again later.",
        "InternalServerError": "An internal server error occurred.",
    },
    "ar": {
        "ValidationFailed": "فشل التحقق من صحة البيانات",
        "UsernameRequired": "اسم المستخدم مطلوب",
        "UsernameTooShort": "يجب أن يتكون اسم المستخدم من 3 أحرف على الأقل",
        "PasswordRequired": "كلمة المرور مطلوبة",
        "PasswordTooWeak": (
            "يجب أن تتكون كلمة المرور من 8 أحرف على الأقل وأن تحتوي على حرف كبير وحرف صغير "
            "ورقم ورمز خاص (! ? * .)"
        ),
        "UsernameAlreadyExists": "اسم المستخدم موجود بالفعل",
        "UserRegisteredSuccessfully": "تم تسجيل المستخدم بنجاح",
        "InvalidCredentials": "اسم المستخدم أو كلمة المرور غير صحيحة",
        "AccountLocked": "الحساب مقفل. يرجى المحاولة مرة أخرى بعد {minutes} دقيقة.",
        "LoginSuccessful": "تم تسجيل الدخول بنجاح",
        "CityNameRequired": "اسم المدينة مطلوب",
        "WeatherDataNotFound": "لم يتم العثور على بيانات الطقس للمدينة المحددة",
        "WeatherDataRetrievedSuccessfully": "تم استرداد بيانات الطقس بنجاح",
        "Unauthorized": "يلزم تسجيل الدخول للوصول إلى هذا المورد",
        "InvalidToken": "رمز غير صالح أو منتهي الصلاحية",
        "TooManyRequests": "طلبات كثيرة جدًا. يرجى المحاولة لاحقًا.",
        "InternalServerError": "حدث خطأ داخلي في الخادم.",
    },
}

SUPPORTED_LANGUAGES = tuple(MESSAGES)


class Localizer:
    """
    Message lookup for one language.

    Unknown keys fall back to English, then to the key itself.
    """

    def __init__(self, language: str = "en"):
        self.language = language if language in MESSAGES else "en"
        self._messages = MESSAGES[self.language]

    def __getitem__(self, key: str) -> str:
        return self._messages.get(key) or MESSAGES["en"].get(key, key)

    def format(self, key: str, **kwargs) -> str:
        """Look up a message template and fill in its placeholders."""
        return self[key].format(**kwargs)


def parse_accept_language(header: Optional[str], default: str = "en") -> str:
    """
    Pick the first supported language from an Accept-Language header.

    Quality values are honoured; region subtags are ignored ("ar-EG" -> "ar").
    """
    if not header:
        return default

    candidates = []
    for index, part in enumerate(header.split(",")):
        piece = part.strip()
        if not piece:
            continue
        lang, _, params = piece.partition(";")
        quality = 1.0
        params = params.strip()
        if params.startswith("q="):
            try:
                quality = float(params[2:])
            except ValueError:
                quality = 0.0
        candidates.append((-quality, index, lang.strip().split("-")[0].lower()))

    for _, _, lang in sorted(candidates):
        if lang in MESSAGES:
            return lang
    return default


def get_localizer(request: Request) -> Localizer:
    """Dependency returning the localizer for the request's language."""
    default = request.app.state.settings.DEFAULT_LANGUAGE
    return Localizer(parse_accept_language(request.headers.get("Accept-Language"), default))
