# casework/core/context.py

import contextvars

correlation_id_ctx = contextvars.ContextVar("correlation_id", default=None)
run_id_ctx = contextvars.ContextVar("run_id", default=None)
case_id_ctx = contextvars.ContextVar("case_id", default=None)
