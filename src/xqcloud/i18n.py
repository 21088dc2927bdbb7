"""Internationalisation strings for result and status messages.

Usage::

    from xqcloud.i18n import t, set_language

    set_language("Chinese")
    print(t().result_draw_repetition)   # "双方不变作和，辛苦了！"
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Strings:
    # ── Terminal results ─────────────────────────────────────────────────
    result_win_checkmate: str
    result_loss_checkmate: str
    result_draw_repetition: str
    result_win_perpetual: str  # opponent lost by perpetual check / chase
    result_loss_perpetual: str
    result_draw_no_material: str
    result_draw_move_limit: str

    # ── Oracle diagnostics ───────────────────────────────────────────────
    trace_header: str
    status_ready: str
    status_cloud_library: str  # "{whose}", "{score}", "{depth}"
    status_engine_api: str  # "{score}", "{depth}"
    status_fen: str  # "{fen}"
    whose_computer: str
    whose_player: str


# ── Built-in locales ─────────────────────────────────────────────────────────

_EN = Strings(
    result_win_checkmate="Congratulations, you won!",
    result_loss_checkmate="Better luck next time!",
    result_draw_repetition="Neither side varied. The game is drawn.",
    result_win_perpetual="Perpetual check or chase loses. Congratulations, you won!",
    result_loss_perpetual="Perpetual check or chase loses. Don't give up!",
    result_draw_no_material="Neither side has attacking pieces left. Draw.",
    result_draw_move_limit="Move limit reached without a capture. Draw.",
    trace_header="Line:",
    status_ready="Ready",
    status_cloud_library="Cloud library move, {whose} score: {score}, depth: {depth}",
    status_engine_api="Cloud engine move, score: {score}, depth: {depth}",
    status_fen="Fen: {fen}",
    whose_computer="computer",
    whose_player="player",
)

_ZH = Strings(
    result_win_checkmate="祝贺你取得胜利！",
    result_loss_checkmate="请再接再厉！",
    result_draw_repetition="双方不变作和，辛苦了！",
    result_win_perpetual="长打作负，祝贺你取得胜利！",
    result_loss_perpetual="长打作负，请不要气馁！",
    result_draw_no_material="双方都没有进攻棋子了，辛苦了！",
    result_draw_move_limit="超过自然限着作和，辛苦了！",
    trace_header="思考细节:",
    status_ready="就绪",
    status_cloud_library="象棋云库出步,{whose}得分:{score},深度:{depth}",
    status_engine_api="云库出步,分数:{score},深度:{depth}",
    status_fen="Fen: {fen}",
    whose_computer="电脑",
    whose_player="玩家",
)

_LOCALES: dict[str, Strings] = {
    "English": _EN,
    "Chinese": _ZH,
}

LANGUAGES: list[str] = list(_LOCALES.keys())

_current: Strings = _EN


def t() -> Strings:
    """Return the active locale strings."""
    return _current


def set_language(language: str) -> None:
    """Switch the global locale. Unknown names fall back to English."""
    global _current
    _current = _LOCALES.get(language, _EN)
