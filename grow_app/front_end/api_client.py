# front_end/api_client.py
import json
import logging
from typing import Any, Dict, Optional

import requests

KEY_STATUS_CODE = "status_code"
KEY_ERROR = "error"
KEY_DETAIL = "detail"
KEY_DATA = "data"

logger = logging.getLogger(__name__)


def call_grow_api(
    endpoint: str,
    backend_url: str,
    method: str = "GET",
    data: Optional[Dict[str, Any]] = None,
    params: Optional[Dict[str, Any]] = None,
    timeout: float = 30,
) -> Dict[str, Any]:
    """
    Helper function to call the backend API. Returns a consistent dictionary format
    and never raises.

    Args:
        endpoint (str): API endpoint path (e.g., "/habits").
        backend_url (str): The base URL of the backend API.
        method (str): HTTP method ("GET", "POST", "DELETE"). Defaults to "GET".
        data (dict, optional): JSON payload for POST requests.
        params (dict, optional): URL parameters.

    Returns:
        Dict containing:
        {'status_code': int, 'data': Optional[Union[dict, list]], 'error': Optional[str]}
    """
    url = f"{backend_url.rstrip('/')}{endpoint}"
    result: Dict[str, Any] = {KEY_STATUS_CODE: 500, KEY_DATA: None, KEY_ERROR: "API call initialization error"}

    logger.debug(f"Calling API: {method.upper()} {url}")
    if data:
        try:
            log_data_repr = json.dumps(data)
        except TypeError:
            log_data_repr = str(data)
        logger.debug(f"Payload (JSON): {log_data_repr[:500]}{'...' if len(log_data_repr) > 500 else ''}")

    try:
        method_upper = method.upper()
        if method_upper == "POST":
            response = requests.post(url, json=data, params=params, timeout=timeout)
        elif method_upper == "GET":
            response = requests.get(url, params=params, timeout=timeout)
        elif method_upper == "DELETE":
            response = requests.delete(url, params=params, timeout=timeout)
        else:
            logger.error(f"Unsupported HTTP method requested: {method}")
            return {KEY_STATUS_CODE: 405, KEY_DATA: None, KEY_ERROR: f"Unsupported HTTP method: {method}"}

        result[KEY_STATUS_CODE] = response.status_code

        # --- Handle Non-Success Status Codes (>= 400) ---
        if not response.ok:
            try:
                error_json = response.json()
                error_detail = error_json.get(KEY_DETAIL, error_json.get(KEY_ERROR, response.text)) if isinstance(error_json, dict) else response.text
                logger.warning(f"HTTP Error {response.status_code} calling {url}. Detail: {error_detail}")
            except ValueError:
                error_detail = response.text or f"HTTP Error {response.status_code} (non-JSON body)"
                logger.warning(f"HTTP Error {response.status_code} calling {url}. Response Text: {error_detail[:500]}")
            result[KEY_ERROR] = str(error_detail or f"HTTP Error {response.status_code}")
            result[KEY_DATA] = None
            return result

        # --- Handle Success Cases (2xx) ---
        if response.status_code == 204 or not response.content:
            result[KEY_DATA] = None
            result[KEY_ERROR] = None
        else:
            try:
                result[KEY_DATA] = response.json()
                result[KEY_ERROR] = None
                logger.debug(f"API Success Response Data: {str(result[KEY_DATA])[:500]}")
            except ValueError:
                logger.error(f"Failed to decode JSON from SUCCESSFUL ({response.status_code}) response from {url}.")
                result[KEY_DATA] = None
                result[KEY_ERROR] = "Failed to decode JSON response from server, although status was OK."

    # --- Handle Network/Request Errors ---
    except requests.exceptions.ConnectionError as conn_err:
        logger.error(f"Connection Error calling {url}: {conn_err}")
        result = {KEY_STATUS_CODE: 503, KEY_DATA: None, KEY_ERROR: f"Connection error: Could not connect to backend at {backend_url}."}
    except requests.exceptions.Timeout as timeout_err:
        logger.error(f"Timeout Error calling {url}: {timeout_err}")
        result = {KEY_STATUS_CODE: 504, KEY_DATA: None, KEY_ERROR: "Timeout error: The request to the backend timed out."}
    except requests.exceptions.RequestException as req_err:
        logger.error(f"Request Exception calling {url}: {req_err}")
        result = {KEY_STATUS_CODE: 500, KEY_DATA: None, KEY_ERROR: f"Network request error: {req_err}"}

    return result
