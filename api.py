"""
Flask API for the CalcPad web widget
Serves the single-page calculator and applies its commands
"""
from flask import Flask, jsonify, request, send_from_directory
from flask_cors import CORS
import logging
import config
import keymap
from calculator import Calculator

app = Flask(__name__, static_folder=config.WEB_DIR, static_url_path='')
CORS(app)  # Enable CORS for all routes

# One widget, one session
calculator = Calculator()


def render_payload(render):
    return {
        'current_display': render.current_display,
        'previous_operation': render.previous_operation,
        'history_open': render.history_open,
        'history': list(render.history_lines),
    }


@app.route('/')
def index():
    """Serve the calculator widget"""
    return send_from_directory(config.WEB_DIR, 'index.html')


@app.route('/api/state')
def get_state():
    """Get the current display state"""
    return jsonify({'success': True, 'data': render_payload(calculator.render())})


@app.route('/api/command', methods=['POST'])
def post_command():
    """Apply one command: {"type": "digit", "value": "7"}"""
    data = request.get_json(silent=True)
    if not data:
        return jsonify({'success': False, 'error': 'No data provided'}), 400
    if not isinstance(data, dict):
        return jsonify({'success': False, 'error': 'Command must be a JSON object'}), 400

    try:
        command = keymap.command_from_payload(data)
    except ValueError as e:
        return jsonify({'success': False, 'error': str(e)}), 400

    try:
        render = calculator.dispatch(command)
        return jsonify({'success': True, 'data': render_payload(render)})
    except Exception as e:
        app.logger.exception("Command %s failed", command)
        return jsonify({'success': False, 'error': str(e)}), 500


@app.route('/api/key', methods=['POST'])
def post_key():
    """Apply a keyboard key: {"key": "Enter", "repeat": false}"""
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not isinstance(data.get('key'), str):
        return jsonify({'success': False, 'error': 'No key provided'}), 400

    # The history flag read and the dispatch must see the same state
    with calculator.lock:
        command = keymap.command_for_key(
            data['key'],
            repeat=bool(data.get('repeat', False)),
            history_open=calculator.history_open,
        )
        if command is None:
            return jsonify({'success': True, 'handled': False,
                            'data': render_payload(calculator.render())})

        try:
            render = calculator.dispatch(command)
        except Exception as e:
            app.logger.exception("Key %r failed", data['key'])
            return jsonify({'success': False, 'error': str(e)}), 500
    return jsonify({'success': True, 'handled': True, 'data': render_payload(render)})


@app.route('/api/history')
def get_history():
    """Get calculation history (most recent entries)"""
    try:
        limit = int(request.args.get('limit', config.MAX_HISTORY))
    except ValueError:
        return jsonify({'success': False, 'error': 'limit must be an integer'}), 400

    with calculator.lock:
        entries = calculator.history.get_calculation_history(limit)
        total = len(calculator.history)
    return jsonify({
        'success': True,
        'data': entries,
        'count': len(entries),
        'total': total,
    })


@app.route('/api/history/clear', methods=['POST'])
def clear_history():
    """Clear calculation history"""
    render = calculator.clear_history()
    return jsonify({'success': True, 'data': render_payload(render)})


@app.route('/api/reset', methods=['POST'])
def reset():
    """Reset the calculator to its initial state (history is kept)"""
    render = calculator.clear()
    return jsonify({'success': True, 'data': render_payload(render)})


if __name__ == '__main__':
    logging.basicConfig(level=config.LOG_LEVEL)
    print("\n" + "="*60)
    print(f"{config.APP_NAME} Web Widget")
    print("="*60)
    print(f"Server starting on http://{config.WEB_HOST}:{config.WEB_PORT}")
    print("="*60 + "\n")

    app.run(host=config.WEB_HOST, port=config.WEB_PORT, debug=False)
