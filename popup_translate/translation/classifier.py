"""
翻訳エラーの分類

プロバイダが返した HTTP ステータス・エラーメッセージ・通信失敗を
ErrorKind に写像し、フォールバック（既定プロバイダへの再試行）の可否を決める。
分類はどのアダプタが送出したかに依存しない。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    """エラー分類"""

    API_KEY_INVALID = "api_key_invalid"
    API_KEY_MISSING = "api_key_missing"
    QUOTA_EXCEEDED = "quota_exceeded"
    RATE_LIMIT = "rate_limit"
    FORBIDDEN = "forbidden"
    SERVER_ERROR = "server_error"
    NETWORK_ERROR = "network_error"
    NON_JSON_RESPONSE = "non_json_response"
    UNKNOWN = "unknown"


# ユーザー操作（キー設定・契約確認）が必要なためフォールバックしない分類
NO_FALLBACK_KINDS = frozenset(
    {
        ErrorKind.API_KEY_INVALID,
        ErrorKind.API_KEY_MISSING,
        ErrorKind.QUOTA_EXCEEDED,
    }
)

INVALID_KEY_MARKERS = (
    "api key not valid",
    "api_key_invalid",
    "invalid api key",
    "invalid_api_key",
    "incorrect api key",
)

QUOTA_MARKERS = (
    "quota",
    "insufficient_quota",
    "credits",
)

UNAUTHENTICATED_MARKERS = INVALID_KEY_MARKERS + (
    "unauthenticated",
    "unauthorized",
    "invalid authentication",
)

RATE_LIMIT_MARKERS = (
    "rate limit",
    "rate_limit",
    "too many requests",
    "resource_exhausted",
)


@dataclass(frozen=True)
class ErrorClassification:
    """エラー分類とフォールバック可否"""

    kind: ErrorKind
    should_fallback: bool

    @classmethod
    def for_kind(cls, kind: ErrorKind) -> ErrorClassification:
        """分類表に従ってフォールバック可否を決めた ErrorClassification を生成"""
        return cls(kind=kind, should_fallback=kind not in NO_FALLBACK_KINDS)


def _contains_any(message: str, markers: tuple) -> bool:
    lowered = message.lower()
    return any(marker in lowered for marker in markers)


class ErrorClassifier:
    """送出されたエラーを ErrorClassification に写像する"""

    @classmethod
    def classify_status(
        cls,
        status: int,
        message: str = "",
        *,
        api_key_configured: bool = True,
    ) -> ErrorClassification:
        """
        HTTP ステータス（とエラーメッセージ）から分類

        Args:
            status: HTTP ステータスコード
            message: プロバイダのエラーメッセージ（400/403 の判別に使用）
            api_key_configured: 呼び出し時に API キーが設定されていたか

        Returns:
            ErrorClassification
        """
        message = message or ""
        if status == 400:
            if _contains_any(message, INVALID_KEY_MARKERS):
                kind = ErrorKind.API_KEY_INVALID
            else:
                kind = ErrorKind.UNKNOWN
        elif status == 401:
            kind = ErrorKind.API_KEY_INVALID if api_key_configured else ErrorKind.API_KEY_MISSING
        elif status == 403:
            if _contains_any(message, QUOTA_MARKERS):
                kind = ErrorKind.QUOTA_EXCEEDED
            else:
                kind = ErrorKind.FORBIDDEN
        elif status == 429:
            kind = ErrorKind.RATE_LIMIT
        elif status >= 500:
            kind = ErrorKind.SERVER_ERROR
        else:
            kind = ErrorKind.UNKNOWN
        return ErrorClassification.for_kind(kind)

    @classmethod
    def classify_provider_message(cls, message: str) -> ErrorClassification:
        """
        ステータスを伴わないエラーエンベロープのメッセージから分類

        中継プロキシが 2xx で包んで返すプロバイダエラー用。
        """
        message = message or ""
        if _contains_any(message, UNAUTHENTICATED_MARKERS):
            kind = ErrorKind.API_KEY_INVALID
        elif _contains_any(message, QUOTA_MARKERS):
            kind = ErrorKind.QUOTA_EXCEEDED
        elif _contains_any(message, RATE_LIMIT_MARKERS):
            kind = ErrorKind.RATE_LIMIT
        else:
            kind = ErrorKind.UNKNOWN
        return ErrorClassification.for_kind(kind)

    @classmethod
    def network(cls) -> ErrorClassification:
        """レスポンスを受信できなかった場合"""
        return ErrorClassification.for_kind(ErrorKind.NETWORK_ERROR)

    @classmethod
    def non_json(cls) -> ErrorClassification:
        """成功ステータスだが本文が JSON でない場合"""
        return ErrorClassification.for_kind(ErrorKind.NON_JSON_RESPONSE)

    @classmethod
    def unknown(cls) -> ErrorClassification:
        return ErrorClassification.for_kind(ErrorKind.UNKNOWN)

    @classmethod
    def classify(cls, error: BaseException) -> ErrorClassification:
        """
        任意の例外を分類

        TranslationError は保持している分類をそのまま返す。
        それ以外の例外（想定外のバグ等）は UNKNOWN として扱う。

        Args:
            error: 送出された例外

        Returns:
            ErrorClassification
        """
        from .exceptions import TranslationError

        if isinstance(error, TranslationError):
            return error.classification

        logger.debug("Unclassified error %s treated as unknown", type(error).__name__)
        return cls.unknown()


def status_from(value: object) -> Optional[int]:
    """"429" のような文字列ステータスも含めて int に変換（変換不能なら None）"""
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
