from flask import Flask, render_template, request, redirect, url_for, session, jsonify
from utils.lineage import resolve
from utils.errors import LookupFailure, NotFoundError, ResolutionError, ValidationError
from utils.formatting import display_name, evolves_at_label
from utils.state import SearchStore, error_message
from utils import logger
from utils.logger import log_action
from collections import OrderedDict
from pathlib import Path
import secrets
import threading
import uuid

# templates ship inside the utils package so installed copies find them
app = Flask(__name__, template_folder=str(Path(__file__).resolve().parent / "utils" / "templates"))
# sessions only carry a store id; new key per process is fine
app.secret_key = secrets.token_hex(32)

app.jinja_env.filters['display_name'] = display_name
app.jinja_env.filters['evolves_at'] = evolves_at_label

# one SearchStore per browser session, oldest evicted past the cap
MAX_SESSIONS = 1000
_stores = OrderedDict()
_stores_lock = threading.Lock()


def current_store() -> SearchStore:
    sid = session.get("sid")
    if sid is None:
        sid = uuid.uuid4().hex
        session["sid"] = sid
    with _stores_lock:
        store = _stores.get(sid)
        if store is None:
            store = _stores[sid] = SearchStore()
            while len(_stores) > MAX_SESSIONS:
                _stores.popitem(last=False)
        else:
            _stores.move_to_end(sid)
        return store


async def run_search(store: SearchStore, name: str) -> bool:
    """drive one lookup through the store; False if a newer search superseded it"""
    token = store.start(name)
    try:
        resolution = await resolve(name)
    except LookupFailure as e:
        log_action(f"search '{name}' failed: {type(e).__name__}")
        return store.fail(token, e)
    except Exception as e:
        log_action(f"ERROR search '{name}' crashed: {type(e).__name__}: {e}")
        return store.fail(token, ResolutionError(f"unexpected failure resolving '{name}'"))
    return store.succeed(token, resolution)


@app.route('/toggle_logging')
def toggle_logging():
    logger.set_verbose(not logger.ENABLE_VERBOSE_LOGGING)
    state = "enabled" if logger.ENABLE_VERBOSE_LOGGING else "disabled"
    log_action(f"Verbose logging {state}")
    return redirect(url_for('index'))


@app.route('/')
async def index():
    store = current_store()
    name = request.args.get("name")
    if name is not None:
        await run_search(store, name)
    # render from state only
    return render_template("index.html", s=store.state)


@app.route('/api/lineage/<path:name>')
async def lineage_api(name):
    """JSON form of a lookup: {entity, lineage} or {error}"""
    try:
        resolution = await resolve(name)
    except ValidationError as e:
        return jsonify(error=error_message(e)), 400
    except NotFoundError as e:
        return jsonify(error=error_message(e)), 404
    except LookupFailure as e:
        return jsonify(error=error_message(e)), 502
    return jsonify(resolution.to_dict())


if __name__ == '__main__':
    app.run(debug=True)
