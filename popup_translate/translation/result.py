"""
翻訳リクエスト・結果のデータクラス

全プロバイダはレスポンス形式に関わらず TranslationResult に正規化して返す。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .exceptions import InvalidTranslationRequest
from .lang_codes import AUTO
from .metadata import DEFAULT_TRANSLATOR_ID


@dataclass(frozen=True)
class TranslationRequest:
    """翻訳リクエスト"""

    text: str  # 翻訳対象テキスト（前後の空白は除去して保持）
    source_lang: str  # ソース言語コード、または "auto"
    target_lang: str  # ターゲット言語コード（"auto" は不可）
    service_id: str = DEFAULT_TRANSLATOR_ID  # 使用するプロバイダ ID
    ui_language: str = "en"  # 表示言語（通知・エラーメッセージ用）

    def __post_init__(self) -> None:
        if not isinstance(self.text, str) or not self.text.strip():
            raise InvalidTranslationRequest("Text must be a non-empty string")
        if not self.source_lang or not self.target_lang:
            raise InvalidTranslationRequest("Source and target languages are required")
        if self.target_lang == AUTO:
            raise InvalidTranslationRequest("Target language cannot be 'auto'")
        # frozen dataclass のため object.__setattr__ で正規化
        object.__setattr__(self, "text", self.text.strip())


@dataclass
class TranslationResult:
    """翻訳結果"""

    translation: str  # 翻訳テキスト（常に文字列）
    src_phonetic: Optional[str] = None  # 原文の発音表記
    target_phonetic: Optional[str] = None  # 訳文の発音表記
    detected_lang: Optional[str] = None  # source_lang == "auto" の場合の検出言語
    fallback_notice: Optional[str] = None  # フォールバック時の通知メッセージ
    service_id: Optional[str] = None  # 実際に結果を返したプロバイダ
    generation: Optional[int] = None  # コントローラが付与するリクエスト世代

    def __post_init__(self) -> None:
        if self.translation is None:
            self.translation = ""

    def to_dict(self) -> Dict[str, Any]:
        """UI 層向けのキー名（camelCase）で辞書に変換"""
        return {
            "translation": self.translation,
            "srcPhonetic": self.src_phonetic,
            "targetPhonetic": self.target_phonetic,
            "detectedLang": self.detected_lang,
            "fallbackNotice": self.fallback_notice,
        }
