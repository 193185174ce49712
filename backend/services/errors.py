"""
服务层错误响应

把故事图异常转换为统一的失败响应，并给出每个错误码对应的 HTTP 状态
"""

from backend.models import ApiResponse
from engine.errors import StoryGraphError, UNRECOVERABLE_ERRORS


# 错误码 -> HTTP 状态码
ERROR_STATUS = {
    "STORY_NOT_FOUND": 404,
    "SCENE_NOT_FOUND": 404,
    "PERMISSION_DENIED": 403,
    "DUPLICATE_SCENE_ID": 409,
    "INVALID_GRAPH": 400,
    "CHOICE_INDEX_OUT_OF_RANGE": 400,
    "MISSING_ENTRY_POINT": 422,
    "BROKEN_LINK": 422,
    "NO_IMAGE": 400,
    "IMAGE_TOO_LARGE": 413,
    "UPLOAD_FAILED": 502,
}


def graph_error_response(exc: StoryGraphError) -> ApiResponse:
    """
    故事图异常 -> 失败响应

    数据损坏类错误（缺少 start、断链）标记为不可恢复，阅读端据此引导用户回到首页
    """
    error = exc.to_dict()
    error["recoverable"] = not isinstance(exc, UNRECOVERABLE_ERRORS)
    return ApiResponse(success=False, message=exc.message, error=error)


def story_not_found() -> ApiResponse:
    return ApiResponse(
        success=False,
        message="Story not found",
        error={"code": "STORY_NOT_FOUND", "message": "故事不存在"}
    )


def permission_denied() -> ApiResponse:
    return ApiResponse(
        success=False,
        message="Permission denied",
        error={"code": "PERMISSION_DENIED", "message": "无权限操作"}
    )


def error_status(result: ApiResponse, default: int = 400) -> int:
    """失败响应对应的 HTTP 状态码"""
    code = (result.error or {}).get("code")
    return ERROR_STATUS.get(code, default)
