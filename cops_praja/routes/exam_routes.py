"""
模擬試験関連のルーティング (JSON API)
"""
from flask import Blueprint, request, jsonify, session, current_app

exam_bp = Blueprint('exam', __name__, url_prefix='/api/exam')


def get_registry():
    """ExamSessionRegistryを取得"""
    return current_app.exam_registry


def get_exam_session_id():
    """ブラウザセッションに紐づく試験セッションID"""
    exam_session_id = session.get('exam_session_id')
    if not exam_session_id:
        exam_session_id = get_registry().new_session_id()
        session['exam_session_id'] = exam_session_id
        session.modified = True
    return exam_session_id


def _json_body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else None


def _dispatch(action, *args):
    snapshot, _ = get_registry().dispatch(get_exam_session_id(), action, *args)
    return jsonify(snapshot)


@exam_bp.route('', methods=['GET'])
def exam_state():
    """現在の試験状態（初回アクセス時に問題を読み込む）"""
    return _dispatch('snapshot')


@exam_bp.route('/answer', methods=['POST'])
def select_answer():
    """Record the option chosen for the current question"""
    data = _json_body()
    option_key = data.get('option') if data else None
    if not isinstance(option_key, str) or not option_key:
        return jsonify({'error': 'Jawaban belum dipilih'}), 400
    return _dispatch('select_answer', option_key)


@exam_bp.route('/navigate', methods=['POST'])
def navigate():
    data = _json_body()
    delta = data.get('delta') if data else None
    if isinstance(delta, bool) or delta not in (-1, 1):
        return jsonify({'error': 'delta harus -1 atau 1'}), 400
    return _dispatch('navigate', int(delta))


@exam_bp.route('/finish', methods=['POST'])
def finish():
    """採点"""
    return _dispatch('finish')


@exam_bp.route('/review', methods=['POST'])
def start_review():
    snapshot, started = get_registry().dispatch(get_exam_session_id(), 'start_review')
    if not started:
        return jsonify({'error': 'Pembahasan belum tersedia', 'state': snapshot}), 409
    return jsonify(snapshot)


@exam_bp.route('/reset', methods=['POST'])
def reset():
    """Discard the exam and start over with a fresh fetch"""
    exam_session_id = get_exam_session_id()
    current_app.logger.info(f"Resetting exam session {exam_session_id}")
    return jsonify(get_registry().reset(exam_session_id))
