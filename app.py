import logging

from flask import Flask, jsonify

from tinydb import TinyDB
from tinydb.storages import MemoryStorage

from qapzk import config
from qapzk.field import CURVE_ORDER

from qap_routes import qap_bp, init_qap_bp


def create_db(path=None):
    """path가 비어 있으면 메모리 DB, 아니면 파일 DB."""
    if path is None:
        path = config.DB_PATH
    if not path:
        return TinyDB(storage=MemoryStorage)  # Memory DB
    return TinyDB(path)                       # Storage DB


def create_app(db=None):
    logging.basicConfig(level=config.LOG_LEVEL,
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")

    app = Flask(__name__)
    app.secret_key = "key"

    if db is None:
        db = create_db()
    init_qap_bp(db.table("qap"))
    app.register_blueprint(qap_bp)

    @app.route("/")
    def main():
        return jsonify({
            "name": "qapzk",
            "curve_order": str(CURVE_ORDER),
            "witness_check": config.WITNESS_CHECK,
            "constant_time_commit": config.CONSTANT_TIME_COMMIT,
        })

    return app


if __name__ == "__main__":
    create_app().run(debug=True)
