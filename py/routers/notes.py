"""
笔记路由
处理笔记的增删改查和批量导入
"""
from typing import Any, List
from fastapi import APIRouter, Body, Depends

from context import AppContext
from dependencies import get_context, require_auth
from schemas.note import (
    NoteCreate, NoteUpdate, NoteResponse,
    NoteSavedResponse, NoteUpdatedResponse, ImportResponse
)
from schemas.common import SuccessResponse, ErrorResponse
from services.note_service import note_service

# 创建路由实例
router = APIRouter(
    dependencies=[Depends(require_auth)],
    responses={401: {"model": ErrorResponse}}
)

_NOT_FOUND = {404: {"model": ErrorResponse}}


@router.get("/notes", response_model=List[NoteResponse])
async def list_notes(ctx: AppContext = Depends(get_context)):
    """获取全部笔记（按更新时间倒序）"""
    return note_service.list_notes(ctx)


@router.get("/notes/{note_id}", response_model=NoteResponse, responses=_NOT_FOUND)
async def get_note(note_id: str, ctx: AppContext = Depends(get_context)):
    """获取单条笔记"""
    return note_service.get_note(ctx, note_id)


@router.post("/notes", response_model=NoteSavedResponse)
async def save_note(note_data: NoteCreate, ctx: AppContext = Depends(get_context)):
    """
    创建或覆盖笔记
    - **id**: 笔记ID（可选，不提供时自动生成）
    - **title**: 标题
    - **content**: Markdown 正文
    - **tags**: 标签列表（可选）
    """
    note = note_service.save_note(ctx, note_data)
    return {"success": True, "id": note["id"]}


@router.put("/notes/{note_id}", response_model=NoteUpdatedResponse, responses=_NOT_FOUND)
async def update_note(
    note_id: str,
    note_update: NoteUpdate,
    ctx: AppContext = Depends(get_context)
):
    """更新笔记（只更新提供的字段）"""
    note = note_service.update_note(ctx, note_id, note_update)
    return {"success": True, "note": note}


@router.delete("/notes/{note_id}", response_model=SuccessResponse, responses=_NOT_FOUND)
async def delete_note(note_id: str, ctx: AppContext = Depends(get_context)):
    """删除笔记"""
    note_service.delete_note(ctx, note_id)
    return {"success": True}


@router.post("/import", response_model=ImportResponse)
async def import_notes(
    payload: Any = Body(...),
    ctx: AppContext = Depends(get_context)
):
    """
    批量导入笔记
    请求体为 {"notes": [...]} 或笔记数组，已存在的ID会被覆盖
    """
    imported, skipped = note_service.import_notes(ctx, payload)
    return {"success": True, "imported": imported, "skipped": skipped}
