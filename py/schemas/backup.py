"""
备份相关Pydantic模型
"""
from pydantic import BaseModel, Field
from typing import Literal, Optional


class BackupUploadResponse(BaseModel):
    """上传备份结果"""
    success: bool = True
    fileName: str = Field(..., description="备份文件名")
    totalNotes: int = Field(..., description="备份的笔记数量")
    target: Literal['webdav', 'storage'] = Field(..., description="备份位置")
    url: Optional[str] = Field(None, description="WebDAV 文件地址")
    uploadTime: str = Field(..., description="上传时间")


class BackupRestoreResponse(BaseModel):
    """恢复备份结果"""
    success: bool = True
    message: str = "笔记已成功从云端下载并导入"
    fileName: str = Field(..., description="备份文件名")
    importedCount: int = Field(..., description="导入数量")
    updatedCount: int = Field(0, description="更新数量（恢复为整体覆盖，恒为0）")
    totalNotes: int = Field(..., description="备份中的笔记数量")
    source: Literal['webdav', 'storage'] = Field(..., description="备份来源")
