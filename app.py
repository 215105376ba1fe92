"""
COPS PRAJA 模擬試験アプリ - メインアプリケーション
Flask + Supabase REST を使用した時間制限付き選択式試験
"""

from datetime import timedelta
from flask import Flask

from cops_praja.core.config import Config
from cops_praja.core.question_store import QuestionStore
from cops_praja.core.session_registry import ExamSessionRegistry
from cops_praja.routes import main_bp, exam_bp


def create_app(config_class=Config):
    """Application Factory Pattern"""
    app = Flask(__name__,
                template_folder='cops_praja/templates',
                static_folder='cops_praja/static')
    app.config.from_object(config_class)

    # セキュリティ設定
    _configure_security(app, config_class)

    # 問題ストア初期化（設定不足はここで即失敗）
    question_store = _init_question_store(app, config_class)

    # アプリケーションコンテキスト設定
    app.question_store = question_store
    app.exam_registry = ExamSessionRegistry(
        question_store,
        duration=config_class.EXAM_DURATION_SECONDS,
        points=config_class.POINTS_PER_CORRECT,
        review_enabled=config_class.REVIEW_ENABLED,
        idle_grace=config_class.SESSION_IDLE_GRACE_SECONDS,
        max_sessions=config_class.MAX_EXAM_SESSIONS,
    )

    # ルーティング登録
    _register_blueprints(app)

    return app


def _configure_security(app, config_class):
    """セキュリティ設定"""
    if not app.config['SECRET_KEY']:
        if config_class.DEBUG:
            app.config['SECRET_KEY'] = 'dev-secret-key-change-in-production'
            app.logger.warning("開発用のSECRET_KEYを使用しています。本番環境では必ず環境変数を設定してください。")
        else:
            raise ValueError("セキュリティエラー: SECRET_KEY環境変数が設定されていません。")

    # セッション設定
    app.config.update(
        SESSION_COOKIE_SECURE=not config_class.DEBUG,
        SESSION_COOKIE_HTTPONLY=True,
        SESSION_COOKIE_SAMESITE='Lax',
        PERMANENT_SESSION_LIFETIME=timedelta(hours=24)
    )


def _init_question_store(app, config_class):
    """問題ストア初期化"""
    store_config = config_class.get_store_config()
    app.logger.info(f"Question store: {store_config.base_url} (limit {store_config.limit})")
    return QuestionStore(store_config)


def _register_blueprints(app):
    """ブループリント登録"""
    blueprints = [
        (main_bp, {}),
        (exam_bp, {}),
    ]

    for blueprint, options in blueprints:
        app.register_blueprint(blueprint, **options)


if __name__ == '__main__':
    import logging
    logging.basicConfig(level=logging.INFO)

    app = create_app()
    app.logger.info(f"🚀 Starting Flask app on port {Config.PORT}")
    app.logger.info(f"🔧 Debug mode: {'ON (開発環境)' if Config.DEBUG else 'OFF (本番環境)'}")
    app.logger.info(f"📝 Review mode: {'ON' if Config.REVIEW_ENABLED else 'OFF'}")

    app.run(debug=Config.DEBUG, host=Config.HOST, port=Config.PORT)
