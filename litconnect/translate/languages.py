"""
Language catalog for the translation service.

Codes follow the ones the MyMemory API accepts (mostly ISO 639-1, with a
few regional variants). ``spanglish`` is a pseudo-language handled
word-by-word as Spanish, and ``auto`` asks the service to detect the
source language first.
"""

from __future__ import annotations

AUTO_DETECT = "auto"
SPANGLISH = "spanglish"

LANGUAGES: dict[str, str] = {
    "af": "Afrikaans",
    "sq": "Albanian",
    "am": "Amharic",
    "ar": "Arabic",
    "hy": "Armenian",
    "az": "Azerbaijani",
    "eu": "Basque",
    "be": "Belarusian",
    "bn": "Bengali",
    "bs": "Bosnian",
    "bg": "Bulgarian",
    "ca": "Catalan",
    "ceb": "Cebuano",
    "ny": "Chichewa",
    "zh-CN": "Chinese (Simplified)",
    "zh-TW": "Chinese (Traditional)",
    "co": "Corsican",
    "hr": "Croatian",
    "cs": "Czech",
    "da": "Danish",
    "nl": "Dutch",
    "en": "English",
    "eo": "Esperanto",
    "et": "Estonian",
    "tl": "Filipino",
    "fi": "Finnish",
    "fr": "French",
    "fy": "Frisian",
    "gl": "Galician",
    "ka": "Georgian",
    "de": "German",
    "el": "Greek",
    "gu": "Gujarati",
    "ht": "Haitian Creole",
    "ha": "Hausa",
    "haw": "Hawaiian",
    "iw": "Hebrew",
    "hi": "Hindi",
    "hmn": "Hmong",
    "hu": "Hungarian",
    "is": "Icelandic",
    "ig": "Igbo",
    "id": "Indonesian",
    "ga": "Irish",
    "it": "Italian",
    "ja": "Japanese",
    "jw": "Javanese",
    "kn": "Kannada",
    "kk": "Kazakh",
    "km": "Khmer",
    "ko": "Korean",
    "ku": "Kurdish",
    "ky": "Kyrgyz",
    "lo": "Lao",
    "la": "Latin",
    "lv": "Latvian",
    "lt": "Lithuanian",
    "lb": "Luxembourgish",
    "mk": "Macedonian",
    "mg": "Malagasy",
    "ms": "Malay",
    "ml": "Malayalam",
    "mt": "Maltese",
    "mi": "Maori",
    "mr": "Marathi",
    "mn": "Mongolian",
    "my": "Myanmar (Burmese)",
    "ne": "Nepali",
    "no": "Norwegian",
    "ps": "Pashto",
    "fa": "Persian",
    "pl": "Polish",
    "pt": "Portuguese",
    "pa": "Punjabi",
    "ro": "Romanian",
    "ru": "Russian",
    "sm": "Samoan",
    "gd": "Scots Gaelic",
    "sr": "Serbian",
    "st": "Sesotho",
    "sn": "Shona",
    "sd": "Sindhi",
    "si": "Sinhala",
    "sk": "Slovak",
    "sl": "Slovenian",
    "so": "Somali",
    "es": "Spanish",
    "es-MX": "Spanish (Mexico)",
    "spanglish": "Spanglish",
    "su": "Sundanese",
    "sw": "Swahili",
    "sv": "Swedish",
    "tg": "Tajik",
    "ta": "Tamil",
    "te": "Telugu",
    "th": "Thai",
    "tr": "Turkish",
    "uk": "Ukrainian",
    "ur": "Urdu",
    "uz": "Uzbek",
    "vi": "Vietnamese",
    "cy": "Welsh",
    "xh": "Xhosa",
    "yi": "Yiddish",
    "yo": "Yoruba",
    "zu": "Zulu",
    "as": "Assamese",
    "ay": "Aymara",
    "bm": "Bambara",
    "bho": "Bhojpuri",
    "doi": "Dogri",
    "ee": "Ewe",
    "gn": "Guarani",
    "ilo": "Ilocano",
    "kri": "Krio",
    "lg": "Luganda",
    "mai": "Maithili",
    "mni-Mtei": "Meiteilon (Manipuri)",
    "lus": "Mizo",
    "or": "Odia (Oriya)",
    "om": "Oromo",
    "qu": "Quechua",
    "sa": "Sanskrit",
    "nso": "Sepedi",
    "ckb": "Sorani Kurdish",
    "ti": "Tigrinya",
    "ts": "Tsonga",
    "tt": "Tatar",
    "tk": "Turkmen",
    "ak": "Twi (Akan)",
    "ug": "Uyghur",
}

RTL_LANGUAGES = frozenset({"ar", "iw", "he", "fa", "ur"})
CJK_LANGUAGES = frozenset({"zh-CN", "zh-TW", "ja", "ko"})


def get_language_name(code: str) -> str:
    """Display name for a code; unknown codes are returned unchanged."""
    if code == AUTO_DETECT:
        return "Auto-detect"
    return LANGUAGES.get(code, code)


def get_all_languages() -> list[tuple[str, str]]:
    """All (code, name) pairs sorted by display name."""
    return sorted(LANGUAGES.items(), key=lambda item: item[1].casefold())


def is_supported(code: str) -> bool:
    return code == AUTO_DETECT or code in LANGUAGES


def is_rtl(code: str) -> bool:
    return code in RTL_LANGUAGES


def is_cjk(code: str) -> bool:
    return code in CJK_LANGUAGES
