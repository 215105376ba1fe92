#!/usr/bin/env python3
"""
COPS PRAJA 模擬試験アプリ
起動スクリプト

使用方法:
    python run.py [--port PORT] [--host HOST] [--debug]

例:
    python run.py
    python run.py --port 8080
    python run.py --host 0.0.0.0 --port 5000 --debug
"""

import argparse
import logging
import sys

from app import create_app
from cops_praja.core.config import Config
from cops_praja.core.errors import ConfigurationError


def main():
    """アプリケーションを起動"""
    parser = argparse.ArgumentParser(description='COPS PRAJA 模擬試験アプリ')
    parser.add_argument('--host', default='localhost', help='ホストアドレス (デフォルト: localhost)')
    parser.add_argument('--port', type=int, default=5000, help='ポート番号 (デフォルト: 5000)')
    parser.add_argument('--debug', action='store_true', help='デバッグモードで起動')

    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO)

    # --debug でも開発用SECRET_KEYへのフォールバックを有効にする
    if args.debug:
        Config.DEBUG = True

    try:
        app = create_app(Config)
    except ConfigurationError as e:
        print(f"❌ 設定エラー: {e}")
        print("   SUPABASE_URL と SUPABASE_ANON_KEY を .env または環境変数で設定してください")
        sys.exit(2)
    except ValueError as e:
        print(f"❌ 設定エラー: {e}")
        print("   SECRET_KEY を設定するか --debug で起動してください")
        sys.exit(2)

    print("=" * 60)
    print("🎓 COPS PRAJA 模擬試験アプリ")
    print("=" * 60)
    print(f"📡 ホスト: {args.host}")
    print(f"🔌 ポート: {args.port}")
    print(f"🐛 デバッグモード: {'有効' if args.debug else '無効'}")
    print(f"🌐 URL: http://{args.host}:{args.port}")
    print("🛑 停止するには Ctrl+C を押してください")
    print("=" * 60)

    try:
        app.run(
            host=args.host,
            port=args.port,
            debug=args.debug,
            use_reloader=args.debug
        )
    except KeyboardInterrupt:
        print("\n\n🛑 アプリケーションを停止しました")
        sys.exit(0)


if __name__ == '__main__':
    main()
