"""
Figma REST API 讀取與快照

讀取 Figma 檔案與本地變數，存成快照，或從快照建立 FigmaDocument。
"""

import json
import os
from typing import Optional

import requests

from .document import FigmaDocument

DOCUMENT_SNAPSHOT = "document.json"
VARIABLES_SNAPSHOT = "variables.json"


class FigmaAPIClient:
    """Figma REST API 唯讀封裝."""

    BASE_URL = "https://api.figma.com/v1"

    def __init__(self, token: str, timeout: float = 60):
        self.token = token
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({
            "X-Figma-Token": token,
            "Content-Type": "application/json",
        })

    def get_file(self, file_key: str) -> dict:
        # 需要整份文件：component 的 main component 與 parent 可能在選取範圍之外
        url = f"{self.BASE_URL}/files/{file_key}"
        resp = self.session.get(url, timeout=self.timeout)
        resp.raise_for_status()
        return resp.json()

    def get_local_variables(self, file_key: str) -> dict:
        url = f"{self.BASE_URL}/files/{file_key}/variables/local"
        resp = self.session.get(url, timeout=self.timeout)
        resp.raise_for_status()
        return resp.json()


def fetch_document(client: FigmaAPIClient, file_key: str) -> tuple[dict, Optional[dict]]:
    """取得檔案與本地變數；變數 API 需要 Enterprise 權限，失敗時回傳 None。"""
    file_data = client.get_file(file_key)
    try:
        variables_data = client.get_local_variables(file_key)
    except requests.RequestException as e:
        print(f"   ⚠️  [figma] 無法讀取本地變數（{e}），variables 將為空")
        variables_data = None
    return file_data, variables_data


def save_snapshot(file_data: dict, variables_data: Optional[dict], output_dir: str = ".figma-compgen") -> tuple[str, Optional[str]]:
    os.makedirs(output_dir, exist_ok=True)

    document_path = os.path.join(output_dir, DOCUMENT_SNAPSHOT)
    with open(document_path, 'w', encoding='utf-8') as f:
        json.dump(file_data, f, indent=2, ensure_ascii=False)

    variables_path = None
    if variables_data is not None:
        variables_path = os.path.join(output_dir, VARIABLES_SNAPSHOT)
        with open(variables_path, 'w', encoding='utf-8') as f:
            json.dump(variables_data, f, indent=2, ensure_ascii=False)

    return document_path, variables_path


def load_snapshot(document_path: str, variables_path: Optional[str] = None) -> FigmaDocument:
    with open(document_path, "r", encoding="utf-8") as f:
        file_data = json.load(f)
    variables_data = None
    if variables_path and os.path.exists(variables_path):
        with open(variables_path, "r", encoding="utf-8") as f:
            variables_data = json.load(f)
    return FigmaDocument(file_data, variables_data)
