# -*- coding: utf-8 -*-
"""
主界面 ViewModel（MVVM）。
负责：文件读取与解析、当前层号、框选放大状态、切片渲染到绘制表面。
View 通过信号接收刷新通知，通过方法获取展示数据与执行命令。
任何状态变化（层号、体数据、选框）之后同步调用一次 render()，render() 总是从当前状态整体重算。
"""

import logging
from pathlib import Path
from typing import List, Tuple

import numpy as np
from PySide6.QtCore import QObject, Signal
from PySide6.QtGui import QImage

from config import DEFAULT_CONFIG, ViewerConfig
from models import AppState, UnsupportedDatatypeError, VoxelDatatype, ZoomSelector, extract_slice, map_grid
from readers import decompress, is_compressed, is_nifti, read_header, read_image
from rendering import magnify, new_surface
from rendering import render as draw_pixels
from viewmodels.workers import FileLoadWorker


class MainViewModel(QObject):
    """
    主界面 ViewModel。
    - 持有 AppState、ZoomSelector 与绘制表面
    - 发出信号：surface_changed, volume_loaded, slice_range_changed, slice_changed,
      zoom_changed, selection_changed, status_message
    """

    # 绘制表面内容已更新
    surface_changed = Signal()
    # 新体数据加载完成
    volume_loaded = Signal()
    # 层号范围 (min, max)
    slice_range_changed = Signal(int, int)
    # 当前层号
    slice_changed = Signal(int)
    # 放大模式开关
    zoom_changed = Signal(bool)
    # 选框变化（View 据此绘制拖拽中的选框轮廓）
    selection_changed = Signal()
    # 状态栏文案
    status_message = Signal(str)

    def __init__(self, config: ViewerConfig = DEFAULT_CONFIG, parent=None):
        super().__init__(parent)
        self._config = config
        self._app_state = AppState()
        self._zoom = ZoomSelector()
        self._surface = new_surface(config.canvas_width, config.canvas_height)
        # 运行中的读取线程，线程结束前需保持引用
        self._workers: List[FileLoadWorker] = []

    @property
    def app_state(self) -> AppState:
        return self._app_state

    @property
    def zoom_selector(self) -> ZoomSelector:
        return self._zoom

    @property
    def surface(self) -> QImage:
        """当前绘制表面，View 直接转为 QPixmap 显示。"""
        return self._surface

    def get_slice_range(self) -> Tuple[int, int]:
        """层号范围；未加载时为 (0, default_slider_max)。"""
        header = self._app_state.header
        if header is None:
            return 0, self._config.default_slider_max
        return 0, header.slice_count - 1

    # ---------- 命令：文件加载 ----------

    def open_file(self, path: Path) -> int:
        """在后台线程读取文件，返回本次请求序号。"""
        sequence = self.begin_load()
        worker = FileLoadWorker(path, sequence)
        worker.loaded.connect(self.finish_load)
        worker.failed.connect(self._on_load_failed)
        worker.finished.connect(self._release_finished_workers)
        self._workers.append(worker)
        self.status_message.emit(f"正在读取：{path}")
        worker.start()
        return sequence

    def begin_load(self) -> int:
        """登记一次新的读取请求；之前请求的结果回来时将被丢弃。"""
        self._app_state.load_sequence += 1
        return self._app_state.load_sequence

    def finish_load(self, sequence: int, data: bytes) -> bool:
        """读取线程完成回调：只接受最近一次请求的结果。"""
        if sequence != self._app_state.load_sequence:
            logging.info(f"丢弃过期的读取结果（序号 {sequence}，当前 {self._app_state.load_sequence}）")
            return False
        return self.load_bytes(data)

    def _on_load_failed(self, sequence: int, message: str) -> None:
        if sequence != self._app_state.load_sequence:
            return
        self.status_message.emit(f"读取文件失败：{message}")

    def _release_finished_workers(self) -> None:
        """在 GUI 线程中释放已结束的读取线程。"""
        for worker in [w for w in self._workers if w.isFinished()]:
            self._workers.remove(worker)
            worker.deleteLater()

    def load_bytes(self, data: bytes) -> bool:
        """
        解析完整的文件字节并替换当前体数据。
        非 NIfTI 输入被忽略：状态不变、不渲染。解码器抛出的异常不在此处理。
        头信息、体素、层号与选框一并替换后只渲染一次。
        """
        if is_compressed(data):
            data = decompress(data)
        if not is_nifti(data):
            logging.warning("输入不是 NIfTI 文件，已忽略")
            self.status_message.emit("不是 NIfTI 文件，已忽略")
            return False

        header = read_header(data)
        image = read_image(header, data)
        self._app_state.header = header
        self._app_state.image = image
        self._app_state.slice_index = header.initial_slice_index()
        self._zoom.clear_selection()

        logging.info(f"已加载体数据：dims={header.dims}，datatype={header.datatype_code}")
        self.slice_range_changed.emit(*self.get_slice_range())
        self.slice_changed.emit(self._app_state.slice_index)
        self.selection_changed.emit()
        self.volume_loaded.emit()
        self.status_message.emit(
            f"已加载：{header.cols} x {header.rows} x {header.slice_count}，"
            f"当前层 {self._app_state.slice_index}"
        )
        self._report_unsupported_datatype()
        self.render()
        return True

    def _report_unsupported_datatype(self) -> None:
        """类型码不受支持时每次加载只报告一次，之后的重绘静默放弃。"""
        try:
            VoxelDatatype.from_code(self._app_state.header.datatype_code)
        except UnsupportedDatatypeError as e:
            logging.warning(str(e))
            self.status_message.emit(str(e))

    # ---------- 命令：层号与放大 ----------

    def set_slice(self, index: int) -> None:
        """设置当前层号（夹到有效范围），变化时重新渲染。"""
        lo, hi = self.get_slice_range()
        index = int(np.clip(index, lo, hi))
        if index == self._app_state.slice_index:
            return
        self._app_state.slice_index = index
        self.slice_changed.emit(index)
        self.render()

    def toggle_zoom(self) -> bool:
        """切换放大模式；关闭时清除选框。返回切换后的开关状态。"""
        cleared = self._zoom.toggle()
        self.zoom_changed.emit(self._zoom.enabled)
        if cleared:
            self.selection_changed.emit()
            self.render()
        return self._zoom.enabled

    def pointer_down(self, x: float, y: float) -> None:
        if self._zoom.pointer_down(x, y):
            self.selection_changed.emit()
            self.render()

    def pointer_move(self, x: float, y: float) -> None:
        if self._zoom.pointer_move(x, y):
            self.selection_changed.emit()
            self.render()

    def pointer_up(self) -> None:
        if self._zoom.pointer_up():
            self.selection_changed.emit()
            self.render()

    # ---------- 渲染 ----------

    def render(self) -> bool:
        """
        用当前层号重绘切片，ZOOMED 状态下再对选框区域放大。
        数据类型不受支持或体素数据不足一层时放弃绘制，保留上一帧。返回是否完成绘制。
        """
        state = self._app_state
        if not state.loaded:
            return False
        header = state.header
        try:
            accessor = state.accessor()
        except UnsupportedDatatypeError:
            # 已在加载时报告过一次
            return False

        grid = extract_slice(header, accessor, state.slice_index)
        if len(accessor) < grid.slice_offset + header.slice_size:
            logging.warning(f"体素数据不足，无法绘制第 {state.slice_index} 层")
            self.status_message.emit("体素数据不完整，未绘制")
            return False

        draw_pixels(self._surface, grid.cols, grid.rows, map_grid(grid.values))
        box = self._zoom.magnification_box(self._surface.width(), self._surface.height())
        if box is not None:
            magnify(self._surface, box)
        self.surface_changed.emit()
        return True
