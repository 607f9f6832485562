#!/usr/bin/env python3
"""
figma-compgen CLI: Figma selection → IR dump / React component

  python -m figma_compgen.cli snapshot --file-key KEY        # 存下檔案與變數快照
  python -m figma_compgen.cli display --node-id 12:34        # IR 樹狀輸出
  python -m figma_compgen.cli debug                          # 變數 (alias 已解析)
  python -m figma_compgen.cli react --node-id 12:34 -o Button.tsx
  python -m figma_compgen.cli watch                          # 快照或選取變更時重新輸出
"""

import argparse
import asyncio
import os
import threading
import time
from pathlib import Path
from typing import Optional

import requests
from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from figma_compgen import __version__

from .config import (
    DEFAULT_CONFIG_PATH,
    debounce_seconds,
    figma_token,
    load_config,
    selection_ids,
    snapshot_dir,
)
from .document import FigmaDocument, normalize_node_id
from .figma_reader import (
    DOCUMENT_SNAPSHOT,
    VARIABLES_SNAPSHOT,
    FigmaAPIClient,
    fetch_document,
    load_snapshot,
    save_snapshot,
)
from .ir_builder import save_ir
from .pipeline import Pipeline


def _api_error(e: Exception, file_key: str) -> None:
    status = getattr(getattr(e, "response", None), "status_code", None)
    if status == 403:
        print("❌ Figma API 403：Token 無效或已過期，請重新產生 FIGMA_TOKEN。")
    elif status == 404:
        print(f"❌ Figma API 404：找不到檔案 '{file_key}'，請確認 file key 是否正確。")
    else:
        print(f"❌ Figma API 錯誤：{e}")


def load_session(args, config: dict) -> Optional[FigmaDocument]:
    """從快照（--document 或 snapshotDir）或 Figma API 建立 FigmaDocument."""
    out_dir = snapshot_dir(config)
    document_path = getattr(args, "document", None) or os.path.join(out_dir, DOCUMENT_SNAPSHOT)
    variables_path = getattr(args, "variables", None) or os.path.join(out_dir, VARIABLES_SNAPSHOT)

    if os.path.exists(document_path):
        return load_snapshot(document_path, variables_path)

    token = figma_token(config)
    file_key = getattr(args, "file_key", None) or config.get("figma", {}).get("fileKey")
    if not token or not file_key:
        print(f"❌ 找不到快照 '{document_path}'，且未設定 FIGMA_TOKEN 與 file key。")
        print("   請先執行 'figma-compgen snapshot --file-key KEY'，或使用 --document 指定檔案。")
        return None

    print(f"📥 Fetching Figma file: {file_key}")
    try:
        file_data, variables_data = fetch_document(FigmaAPIClient(token), file_key)
    except requests.RequestException as e:
        _api_error(e, file_key)
        return None
    return FigmaDocument(file_data, variables_data)


def _selected_ids(args, config: dict) -> list:
    node_ids = getattr(args, "node_id", None) or selection_ids(config)
    return [normalize_node_id(n) for n in node_ids]


def _report(message: dict, output: Optional[str]) -> None:
    if message["type"] == "error":
        print(f"❌ {message['message']}")
        return
    if output:
        path = Path(output)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(message["message"], encoding="utf-8")
        print(f"✅ Component written to {path}")
    else:
        print(message["message"])


def cmd_snapshot(args, config: dict):
    """Snapshot: 讀取 Figma 檔案與本地變數並存檔."""
    token = figma_token(config)
    file_key = args.file_key or config.get("figma", {}).get("fileKey")
    if not token:
        print("❌ 請設定 FIGMA_TOKEN 環境變數，或在 figma-compgen.config.json 的 figma.personalAccessToken 設定。")
        print("   取得方式：Figma → Settings → Personal access tokens → 新增")
        return
    if not file_key:
        print("❌ 請使用 --file-key 或在 config 的 figma.fileKey 設定 Figma 檔案 key。")
        return

    print(f"📥 Snapshot Figma file: {file_key}")
    try:
        file_data, variables_data = fetch_document(FigmaAPIClient(token), file_key)
    except requests.RequestException as e:
        _api_error(e, file_key)
        return

    document_path, variables_path = save_snapshot(file_data, variables_data, snapshot_dir(config))
    print(f"   ✅ Saved to {document_path}")
    if variables_path:
        print(f"   ✅ Saved to {variables_path}")


def cmd_run(args, config: dict):
    """display / debug / generate / react：載入快照、選取節點、執行 pipeline."""
    document = load_session(args, config)
    if document is None:
        return

    selection = []
    if args.command != "debug":
        node_ids = _selected_ids(args, config)
        if not node_ids:
            print("❌ 請使用 --node-id 或在 config 的 selection.nodeIds 指定要處理的節點。")
            return
        selection = document.select(node_ids)

    posted = []
    pipeline = Pipeline(document, post=posted.append)
    result = asyncio.run(pipeline.handle(args.command, selection))
    for message in posted:
        _report(message, getattr(args, "output", None))

    if args.command == "display" and getattr(args, "save", False):
        ir_path = save_ir(result, snapshot_dir(config))
        print(f"📄 IR saved to {ir_path}")


def report_dump_failure(future) -> None:
    """Done-callback：背景 dump 失敗時印出原因。"""
    if future.cancelled():
        return
    e = future.exception()
    if e is not None:
        print(f"   ⚠️  Dump failed: {e}")


class ChangeHandler(FileSystemEventHandler):
    """快照或設定檔變更事件處理器，帶 debounce 防抖。

    每個事件都會重設計時器，最後一次變更後靜置 debounce 秒才觸發，
    所以 dump 讀到的一定是最新狀態（寫到一半的檔案不會被讀）。
    """

    def __init__(self, callback, loop: asyncio.AbstractEventLoop, watched_names, debounce: float = 1.0):
        self.callback = callback
        self.loop = loop
        self.watched_names = set(watched_names)
        self.debounce_seconds = debounce
        self.last_path: Optional[str] = None
        self._timer: Optional[threading.Timer] = None
        self._lock = threading.Lock()

    def on_modified(self, event):
        if event.is_directory:
            return
        if os.path.basename(event.src_path) not in self.watched_names:
            return
        with self._lock:
            self.last_path = event.src_path
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(self.debounce_seconds, self._fire)
            self._timer.daemon = True
            self._timer.start()

    on_created = on_modified

    def _fire(self):
        print(f"\n🔄 Changed: {self.last_path}")
        # 透過 threadsafe 把 coroutine 丟進 loop（loop 在獨立執行緒中 run_forever）
        future = asyncio.run_coroutine_threadsafe(self.callback(), self.loop)
        future.add_done_callback(report_dump_failure)
        return future

    def cancel(self):
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None


def cmd_watch(args, config: dict):
    """Watch: 快照或 selection 變更時重新輸出整棵 IR."""
    config_path = Path(args.config).resolve()
    out_dir = Path(snapshot_dir(config)).resolve()
    out_dir.mkdir(parents=True, exist_ok=True)
    print(f"👀 Watching '{out_dir}' and '{config_path.name}' for changes...")
    print("   Press Ctrl+C to stop.")

    loop = asyncio.new_event_loop()

    async def dump_task():
        # 每次重新讀取設定與快照：新的選取 = 新的一次完整走訪
        current = load_config(str(config_path))
        document = load_session(argparse.Namespace(), current)
        if document is None:
            return
        selection = document.select([normalize_node_id(n) for n in selection_ids(current)])
        await Pipeline(document).on_selection_change(selection)

    def run_loop():
        asyncio.set_event_loop(loop)
        loop.run_forever()

    loop_thread = threading.Thread(target=run_loop, daemon=True)
    loop_thread.start()

    future = asyncio.run_coroutine_threadsafe(dump_task(), loop)
    try:
        future.result(timeout=120)
    except Exception as e:
        print(f"   ⚠️  Initial dump failed: {e}")

    handler = ChangeHandler(
        dump_task, loop,
        watched_names=(DOCUMENT_SNAPSHOT, VARIABLES_SNAPSHOT, config_path.name),
        debounce=debounce_seconds(config),
    )
    observer = Observer()
    for directory in {out_dir, config_path.parent}:
        observer.schedule(handler, path=str(directory), recursive=False)
    observer.start()

    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        print("\n👋 Stopping watch...")
        observer.stop()
    finally:
        observer.join()
        handler.cancel()
        loop.call_soon_threadsafe(loop.stop)


def _add_session_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--document", help="Saved GET /v1/files/:key response (default: <snapshotDir>/document.json)")
    p.add_argument("--variables", help="Saved /variables/local response (default: <snapshotDir>/variables.json)")
    p.add_argument("--file-key", help="Figma file key, used when no snapshot exists")


def main():
    parser = argparse.ArgumentParser(
        description="figma-compgen: Figma selection → IR dump / React component",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--config", "-c", default=DEFAULT_CONFIG_PATH, help="Config path")
    parser.add_argument("--version", "-v", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command")

    snap_p = sub.add_parser("snapshot", help="Save Figma file + local variables",
        epilog="Examples:\n  figma-compgen snapshot --file-key ABC123",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    snap_p.add_argument("--file-key", help="Figma file key")

    display_p = sub.add_parser("display", help="Print the IR outline of the selection",
        epilog="Examples:\n  figma-compgen display --node-id 12:34\n  figma-compgen display --node-id 12-34 --node-id 56:78 --save",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    _add_session_args(display_p)
    display_p.add_argument("--node-id", action="append", help="Selected node id (repeatable)")
    display_p.add_argument("--save", action="store_true", help="Write selection-ir.json to the snapshot dir")

    debug_p = sub.add_parser("debug", help="Print local variable collections with aliases resolved")
    _add_session_args(debug_p)

    for name, help_text in (("react", "Generate a React component from a component set"),
                            ("generate", "Same as react")):
        gen_p = sub.add_parser(name, help=help_text,
            epilog=f"Examples:\n  figma-compgen {name} --node-id 12:34\n  figma-compgen {name} --node-id 12:34 --output src/Button.tsx",
            formatter_class=argparse.RawDescriptionHelpFormatter)
        _add_session_args(gen_p)
        gen_p.add_argument("--node-id", action="append", help="Component set node id")
        gen_p.add_argument("--output", "-o", help="Write the component to this file")

    sub.add_parser("watch", help="Re-dump the selection when the snapshot or selection changes")

    args = parser.parse_args()
    config = load_config(args.config)

    if args.command == "snapshot":
        cmd_snapshot(args, config)
    elif args.command in ("display", "debug", "react", "generate"):
        cmd_run(args, config)
    elif args.command == "watch":
        cmd_watch(args, config)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
