"""
通用Pydantic模型
"""
from pydantic import BaseModel, Field
from typing import Optional


class SuccessResponse(BaseModel):
    """通用成功响应"""
    success: bool = Field(default=True, description="操作是否成功")

    class Config:
        json_schema_extra = {
            "example": {"success": True}
        }


class ErrorResponse(BaseModel):
    """错误响应模型"""
    success: bool = Field(default=False, description="操作是否成功")
    error: str = Field(..., description="错误消息")
    detail: Optional[str] = Field(default=None, description="详细错误信息")

    class Config:
        json_schema_extra = {
            "example": {
                "success": False,
                "error": "Unauthorized"
            }
        }
