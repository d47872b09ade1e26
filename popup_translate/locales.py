"""
組み込みの表示文字列（英語・ベトナム語）

キーは I18nManager に名前空間付きで登録される。
  errors.<ErrorKind の値>, errors.all_services_failed, errors.invalid_request,
  service.<サービスID>, labels.<項目>, fallback_notice
"""

from __future__ import annotations

from typing import Dict, Mapping, Optional

from .i18n import I18nManager

LOCALES: Dict[str, Dict[str, object]] = {
    "en": {
        "fallback_notice": "API limit/error: {error}\nSwitched to {service}.",
        "service": {
            "google": "Google Translate",
            "gemini": "Gemini AI",
            "openai": "OpenAI",
            "mymemory": "MyMemory",
        },
        "errors": {
            "api_key_invalid": "API Key is invalid. Please check your settings.",
            "api_key_missing": "API Key is missing. Please check your settings.",
            "quota_exceeded": "Quota/Credits exceeded. Please check your account or switch services.",
            "rate_limit": "Rate limit exceeded. Please try again later.",
            "forbidden": "Access forbidden. Please check your permissions.",
            "server_error": "Service error. Please try again later.",
            "network_error": "Network error. Please check your connection.",
            "non_json_response": "Unexpected response from the service",
            "unknown": "Unknown error occurred",
            "all_services_failed": "All translation services failed",
            "invalid_request": "Invalid translation request",
        },
        "labels": {
            "translation": "Translation",
            "source_phonetic": "Original phonetic",
            "target_phonetic": "Translation phonetic",
            "detected_language": "Detected language",
            "service": "Service",
        },
    },
    "vi": {
        "fallback_notice": "Lỗi API: {error}\nĐã tự động chuyển sang {service}.",
        "service": {
            "google": "Google Dịch",
            "gemini": "Gemini AI",
            "openai": "OpenAI",
            "mymemory": "MyMemory",
        },
        "errors": {
            "api_key_invalid": "API Key không hợp lệ. Vui lòng kiểm tra lại cài đặt.",
            "api_key_missing": "Thiếu API Key. Vui lòng kiểm tra cài đặt.",
            "quota_exceeded": "Đã hết Quota/Credits. Vui lòng kiểm tra tài khoản hoặc đổi dịch vụ.",
            "rate_limit": "Quá giới hạn lượt gọi (Rate limit). Vui lòng thử lại sau.",
            "forbidden": "Truy cập bị từ chối. Vui lòng kiểm tra quyền hạn.",
            "server_error": "Lỗi máy chủ dịch vụ. Vui lòng thử lại sau.",
            "network_error": "Lỗi kết nối mạng.",
            "non_json_response": "Phản hồi không hợp lệ từ dịch vụ",
            "unknown": "Lỗi không xác định",
            "all_services_failed": "Tất cả dịch vụ dịch đều thất bại",
            "invalid_request": "Yêu cầu dịch không hợp lệ",
        },
        "labels": {
            "translation": "Bản dịch",
            "source_phonetic": "Phiên âm gốc",
            "target_phonetic": "Phiên âm bản dịch",
            "detected_language": "Ngôn ngữ phát hiện",
            "service": "Dịch vụ",
        },
    },
}


def _flatten(table: Mapping[str, object], prefix: str = "") -> Dict[str, str]:
    flat: Dict[str, str] = {}
    for key, value in table.items():
        qualified = f"{prefix}.{key}" if prefix else key
        if isinstance(value, Mapping):
            flat.update(_flatten(value, qualified))
        else:
            flat[qualified] = str(value)
    return flat


def register_default_locales(manager: I18nManager) -> I18nManager:
    """組み込みの文言を全言語分 manager に登録して返す"""
    for language, table in LOCALES.items():
        manager.register_fallbacks(_flatten(table), language=language)
    return manager


def build_default_i18n(default_language: Optional[str] = None) -> I18nManager:
    """組み込み文言を登録済みの新しい I18nManager を生成"""
    manager = I18nManager(default_language or "en")
    return register_default_locales(manager)


def available_ui_languages() -> list:
    return list(LOCALES.keys())
