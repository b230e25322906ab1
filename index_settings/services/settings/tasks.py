"""Surface a failed settings task as a typed error. Polling for the task is left to the caller."""

from index_settings.config.logging import get_logger
from index_settings.errors import DeferredValidationError
from index_settings.schema.task import TaskInfo

logger = get_logger(__name__)


def raise_for_failed_task(task: TaskInfo) -> TaskInfo:
    """
    Return task unchanged unless the service reports it failed; then raise DeferredValidationError
    with the service's code and message. Cross-field rules are only checked here, after dispatch.
    """
    if task.status != "failed":
        return task
    error = task.error
    message = error.message if error else "Settings task failed"
    logger.warning(
        "Settings task failed",
        extra={
            "task_uid": task.task_uid,
            "index_uid": task.index_uid,
            "code": error.code if error else None,
        },
    )
    raise DeferredValidationError(
        f"Task {task.task_uid} failed: {message}",
        body=error.model_dump(by_alias=True) if error else None,
        code=error.code if error else None,
        error_type=error.type if error else None,
    )
