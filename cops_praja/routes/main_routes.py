"""
メインページのルーティング
"""
from flask import Blueprint, render_template, jsonify, current_app

main_bp = Blueprint('main', __name__)


@main_bp.route('/health')
def health():
    """ヘルスチェックエンドポイント"""
    return jsonify({'status': 'healthy', 'sessions': len(current_app.exam_registry)}), 200


@main_bp.route('/')
@main_bp.route('/index')
def index():
    """Exam page; state is loaded by the page script from /api/exam"""
    return render_template('exam.html', title=current_app.config.get('EXAM_TITLE', 'COPS PRAJA'))
