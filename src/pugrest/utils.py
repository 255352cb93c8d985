"""
PubChem API utilities and helper functions
"""
import time
import logging
from typing import Dict, Optional

import requests

from .errors import FloatParseError, IntegerParseError, RequestError
from .settings import USER_AGENT, TIMEOUT, MAX_RETRY, RETRY_STATUS_CODES

INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1


def parse_int(text: str, field: str) -> int:
    """
    要素テキストを符号付き32bit整数に変換
    """
    try:
        value = int(text)
    except ValueError as e:
        raise IntegerParseError(field, text) from e
    if not INT32_MIN <= value <= INT32_MAX:
        raise IntegerParseError(field, text, "out of 32-bit range")
    return value


def parse_float(text: str, field: str) -> float:
    """
    要素テキストを浮動小数点数に変換
    """
    try:
        return float(text)
    except ValueError as e:
        raise FloatParseError(field, text) from e


def safe_post(url: str, data: Dict[str, str], headers: Optional[Dict[str, str]] = None):
    """
    PUG REST への POST リクエスト：
    - ステータスコードの判定は呼び出し側に任せ、応答をそのまま返す
    - 429 と一時的なネットワークエラー（タイムアウト、接続エラー等）のみリトライ
    """
    request_headers = dict(USER_AGENT)
    if headers:
        request_headers.update(headers)

    for i in range(MAX_RETRY):
        try:
            r = requests.post(url, data=data, headers=request_headers, timeout=TIMEOUT, stream=True)
        except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
            if i < MAX_RETRY - 1:
                wait_time = 2 ** (i + 1)  # 2, 4, 8秒
                logging.warning(f"ネットワークエラー (試行{i+1}/{MAX_RETRY}): {e} - {wait_time}秒後リトライ")
                time.sleep(wait_time)
                continue
            raise RequestError(f"POST {url} failed: {e}") from e
        except requests.exceptions.RequestException as e:
            raise RequestError(f"POST {url} failed: {e}") from e

        # 429 Rate Limit：少し待ってリトライ
        if r.status_code in RETRY_STATUS_CODES and i < MAX_RETRY - 1:
            wait_time = 30 + (2 ** i)  # 30, 32, 36秒
            logging.warning(f"レート制限 (試行{i+1}/{MAX_RETRY}): {wait_time}秒待機")
            r.close()
            time.sleep(wait_time)
            continue

        logging.debug(f"POST {url}: ステータス {r.status_code}")
        return r

    # MAX_RETRY < 1 の設定でのみ到達する
    raise RequestError(f"POST {url} was not attempted (MAX_RETRY={MAX_RETRY})")
