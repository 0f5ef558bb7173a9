from flask import jsonify


def success(data, status: int = 200):
    """Wrap ``data`` in the {ok, meta, data} envelope"""
    return jsonify({"ok": True, "meta": {"status": status}, "data": data}), status


def failure(msg, status: int = 500):
    return jsonify({"ok": False, "msg": msg}), status
