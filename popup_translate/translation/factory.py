"""
翻訳サービスのファクトリー

TranslatorFactory は翻訳サービスを作成・キャッシュするファクトリークラス。
サービスインスタンスは設定を持つだけで状態を持たないため、
サービス ID ごとに1つを共有し、設定変更時にまとめて作り直す。
"""

from __future__ import annotations

import importlib
import logging
from copy import deepcopy
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from ..config import ConfigValidator, get_default_config, merge_config
from .metadata import TranslatorMetadata

if TYPE_CHECKING:
    from ..phonetics import PhoneticService
    from .base import BaseTranslator
    from .transport import HttpTransport, ProxyFetcher

logger = logging.getLogger(__name__)


class TranslatorFactory:
    """翻訳サービスを作成・キャッシュするファクトリークラス"""

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        *,
        phonetic_service: Optional[PhoneticService] = None,
        transport: Optional[HttpTransport] = None,
        proxy_fetcher: Optional[ProxyFetcher] = None,
    ):
        """
        Args:
            config: 既定設定に上書きする設定（部分指定可）
            phonetic_service: 全サービスで共有する PhoneticService
            transport: 全サービスで共有する HttpTransport
            proxy_fetcher: OpenAI 互換サービスが使う中継フェッチ

        Raises:
            ValueError: 設定の検証に失敗した場合
        """
        merged = merge_config(get_default_config(), config)
        ConfigValidator.validate_or_raise(merged)
        self._config = merged
        self._deps: Dict[str, Any] = {
            name: value
            for name, value in (
                ("phonetic_service", phonetic_service),
                ("transport", transport),
                ("proxy_fetcher", proxy_fetcher),
            )
            if value is not None
        }
        self._translators: Dict[str, BaseTranslator] = {}

    @property
    def config(self) -> Dict[str, Any]:
        """現在の設定（コピー）"""
        return deepcopy(self._config)

    def get_translator(self, service_id: Optional[str]) -> BaseTranslator:
        """
        サービスインスタンスを取得（キャッシュ済みなら同じインスタンス）

        未登録の ID は警告を出して既定サービスに解決する（例外は送出しない）。

        Args:
            service_id: 翻訳サービスID

        Returns:
            BaseTranslator のインスタンス
        """
        resolved = TranslatorMetadata.resolve(service_id)
        if resolved != service_id:
            logger.warning("Unknown service: %s, falling back to %s", service_id, resolved)

        translator = self._translators.get(resolved)
        if translator is None:
            translator = self.create_translator(resolved)
            self._translators[resolved] = translator
        return translator

    def create_translator(self, service_id: str) -> BaseTranslator:
        """
        指定された ID の翻訳サービスを新規作成（キャッシュしない）

        Args:
            service_id: 翻訳サービスID
                利用可能: google, gemini, openai, mymemory

        Returns:
            BaseTranslator のインスタンス

        Raises:
            ValueError: 不明な翻訳サービスIDが指定された場合

        Examples:
            >>> factory = TranslatorFactory({"api_keys": {"gemini": "AI..."}})
            >>> translator = factory.create_translator("gemini")
        """
        metadata = TranslatorMetadata.get(service_id)
        if metadata is None:
            available = TranslatorMetadata.list_translator_ids()
            raise ValueError(
                f"Unknown translator type: {service_id}. " f"Available: {available}"
            )

        module = importlib.import_module(metadata.module, package="popup_translate.translation")
        translator_class = getattr(module, metadata.class_name)
        logger.debug("Creating translator %s (%s)", service_id, metadata.class_name)
        return translator_class.from_config(self._config, **self._deps)

    def clear_cache(self) -> None:
        """キャッシュ済みのサービスインスタンスを破棄"""
        self._translators.clear()

    def update_config(self, partial: Optional[Dict[str, Any]]) -> None:
        """
        設定を部分更新し、キャッシュを破棄

        次回の get_translator で新しい設定のインスタンスが作られる。

        Raises:
            ValueError: 更新後の設定の検証に失敗した場合（設定は変更されない）
        """
        merged = merge_config(self._config, partial)
        ConfigValidator.validate_or_raise(merged)
        self._config = merged
        self.clear_cache()

    @classmethod
    def list_available_translators(cls) -> List[str]:
        """
        利用可能な翻訳サービスのリストを取得

        Returns:
            翻訳サービスIDのリスト
        """
        return TranslatorMetadata.list_translator_ids()
