from django.utils import translation

from apps.core.ports.translator import ITranslator

DEFAULT_LANGUAGE = 'en'

# Klucze jak w interfejsie (LanguageContext). Japoński jest drugim językiem aplikacji.
CATALOG = {
    'en': {
        'adjustment.intensified': "(INTENSIFIED: Schedule compressed!)",
        'adjustment.not_late': "This milestone is not behind schedule.",
        'adjustment.extended': "Schedule extended by {days} days.",
        'adjustment.squeezed': "Milestone intensified.",
        'dashboard.all_caught_up': "All caught up!",
        'milestone.completed': "Milestone completed!",
        'timeline.status.pending': "Pending",
        'timeline.status.completed': "Completed",
        'timeline.status.missed': "Missed",
        'timeline.status.adjusted': "Adjusted",
        'email.subject': "PaceMaker Update: {goal_title}",
        'email.default_message': "You're doing great! Keep pushing forward.",
        'profile.saved': "Profile saved!",
        'goal.created': "Goal created!",
        'goal.imported': "Goal imported!",
    },
    'ja': {
        'adjustment.intensified': "【強化】スケジュール圧縮！",
        'adjustment.not_late': "このマイルストーンは遅れていません。",
        'adjustment.extended': "スケジュールを{days}日延長しました。",
        'adjustment.squeezed': "マイルストーンを強化しました。",
        'dashboard.all_caught_up': "すべて完了！",
        'milestone.completed': "マイルストーン達成！",
        'timeline.status.pending': "未完了",
        'timeline.status.completed': "完了",
        'timeline.status.missed': "未達",
        'timeline.status.adjusted': "調整済み",
        'email.subject': "PaceMaker 進捗: {goal_title}",
        'email.default_message': "順調です！この調子で進みましょう。",
        'profile.saved': "プロフィールを保存しました！",
        'goal.created': "目標を作成しました！",
        'goal.imported': "目標をインポートしました！",
    },
}


class CatalogTranslator(ITranslator):
    """Tłumaczenia z katalogu, język z aktywnego języka Django (LocaleMiddleware)."""

    def __init__(self, language: str = None):
        self.language = language

    def _language(self) -> str:
        code = self.language or translation.get_language() or DEFAULT_LANGUAGE
        # 'ja-jp' -> 'ja'
        return code.split('-')[0].lower()

    def translate(self, key: str) -> str:
        messages = CATALOG.get(self._language(), {})
        if key in messages:
            return messages[key]
        # Fallback: angielski, a potem sam klucz
        return CATALOG[DEFAULT_LANGUAGE].get(key, key)
