"""
読み上げ（音声合成）の境界

実際の音声合成はホスト側（ブラウザの speechSynthesis 等）が担う。
コアは発話内容を Utterance にまとめてバックエンドに渡すだけ。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Protocol

logger = logging.getLogger(__name__)

DEFAULT_RATE = 0.9
DEFAULT_PITCH = 1.0


@dataclass(frozen=True)
class Utterance:
    """1回分の発話"""

    text: str
    lang: str
    rate: float = DEFAULT_RATE
    pitch: float = DEFAULT_PITCH


class SpeechBackend(Protocol):
    """ホスト側の音声合成"""

    def speak(self, utterance: Utterance) -> None:
        ...

    def cancel(self) -> None:
        ...


class NullSpeechBackend:
    """
    何も再生しないバックエンド

    CLI やテストで使用。渡された発話は spoken に記録する。
    """

    def __init__(self) -> None:
        self.spoken: List[Utterance] = []

    def speak(self, utterance: Utterance) -> None:
        logger.debug("Speech requested (%s): %s", utterance.lang, utterance.text)
        self.spoken.append(utterance)

    def cancel(self) -> None:
        pass


class SpeechService:
    """読み上げサービス"""

    def __init__(self, backend: Optional[SpeechBackend] = None):
        self.backend = backend or NullSpeechBackend()

    def speak(self, text: str, lang: str) -> None:
        """
        テキストを読み上げる

        再生中の発話があれば先に停止する。空テキストは無視。
        """
        self.stop()
        if not text or not text.strip():
            return
        self.backend.speak(Utterance(text=text, lang=lang))

    def stop(self) -> None:
        """再生中の発話を停止"""
        self.backend.cancel()
