from functools import wraps
from flask import current_app

from resellerhub.extensions import db
from resellerhub.errors import WorkflowError, StoreError


def service_operation(f):
    """Turn a service method into one that always returns an envelope.

    Workflow errors become `{'success': False, 'error': ...}`; anything else
    is logged with its traceback and reported as a store error.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except WorkflowError as e:
            db.session.rollback()
            current_app.logger.info(f"{f.__qualname__} refused: {e.message}")
            return e.to_result()
        except Exception as e:
            db.session.rollback()
            current_app.logger.exception(f"Error in {f.__qualname__}: {e}")
            return StoreError(str(e)).to_result()
    return decorated_function
