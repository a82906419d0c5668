# -*- coding: utf-8 -*-
"""
框选放大状态机（Model）。
状态：IDLE（放大关闭）、ARMED（已开启未拖拽）、DRAGGING（拖拽中）、ZOOMED（已松开并放大）。
各事件处理函数返回 True 表示需要重新渲染。
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class ZoomState(Enum):
    IDLE = "idle"
    ARMED = "armed"
    DRAGGING = "dragging"
    ZOOMED = "zoomed"


@dataclass(frozen=True)
class SelectionRect:
    """画布像素坐标下的选框，width / height 可以为负（向左上拖拽）。"""

    x: float
    y: float
    width: float
    height: float

    def normalized(self) -> Tuple[float, float, float, float]:
        """返回 (left, top, right, bottom)，保证 left <= right、top <= bottom。"""
        x0, x1 = sorted((self.x, self.x + self.width))
        y0, y1 = sorted((self.y, self.y + self.height))
        return x0, y0, x1, y1


class ZoomSelector:
    """
    框选放大状态机。
    - 关闭放大（进入 IDLE）时总是清除选框
    - 仅 ZOOMED 状态下对渲染结果做放大，拖拽中只重绘原始切片
    """

    def __init__(self):
        self._state = ZoomState.IDLE
        self._selection: Optional[SelectionRect] = None

    @property
    def state(self) -> ZoomState:
        return self._state

    @property
    def enabled(self) -> bool:
        return self._state is not ZoomState.IDLE

    @property
    def selection(self) -> Optional[SelectionRect]:
        return self._selection

    def toggle(self) -> bool:
        """切换放大模式：IDLE -> ARMED，其余状态 -> IDLE 并清除选框。"""
        if self._state is ZoomState.IDLE:
            self._state = ZoomState.ARMED
            return False
        had_selection = self._selection is not None
        self._state = ZoomState.IDLE
        self._selection = None
        return had_selection

    def clear_selection(self) -> None:
        """新文件加载时调用：丢弃选框，保留放大模式开关。"""
        self._selection = None
        if self._state is not ZoomState.IDLE:
            self._state = ZoomState.ARMED

    def pointer_down(self, x: float, y: float) -> bool:
        """ARMED / ZOOMED 下按下：开始新选框 (x, y, 0, 0)。"""
        if self._state not in (ZoomState.ARMED, ZoomState.ZOOMED):
            return False
        self._state = ZoomState.DRAGGING
        self._selection = SelectionRect(x, y, 0, 0)
        return True

    def pointer_move(self, x: float, y: float) -> bool:
        """拖拽中移动：宽高更新为相对起点的有符号位移。"""
        if self._state is not ZoomState.DRAGGING or self._selection is None:
            return False
        start = self._selection
        self._selection = SelectionRect(start.x, start.y, x - start.x, y - start.y)
        return True

    def pointer_up(self) -> bool:
        """松开：DRAGGING -> ZOOMED，需要重新渲染以应用放大。"""
        if self._state is not ZoomState.DRAGGING:
            return False
        self._state = ZoomState.ZOOMED
        return True

    def magnification_box(self, width: int, height: int) -> Optional[Tuple[int, int, int, int]]:
        """
        ZOOMED 状态下返回需要放大的区域 (left, top, right, bottom)，右/下边界不含。
        选框先归一化再夹到 [0, width] x [0, height] 内；面积为 0 时返回 None。
        """
        if self._state is not ZoomState.ZOOMED or self._selection is None:
            return None
        left, top, right, bottom = self._selection.normalized()
        left = int(min(max(left, 0), width))
        right = int(min(max(right, 0), width))
        top = int(min(max(top, 0), height))
        bottom = int(min(max(bottom, 0), height))
        if right <= left or bottom <= top:
            return None
        return left, top, right, bottom
