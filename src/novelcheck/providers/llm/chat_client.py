# -*- coding: utf-8 -*-
"""
providers/llm/chat_client.py

这个文件做什么：
- 提供一个极薄的 OpenAI 兼容 Chat Client（默认智谱 GLM），供 oracle 调用。
- 从项目根目录的 .env 读取配置，不要求在 shell 里 export。
- 对外只暴露一个方法：chat_json(system_prompt, user_prompt) -> dict

配置来源优先级（从高到低）：
1) 显式传参（model/base_url/api_key/timeout_s）
2) .env 文件
3) 系统环境变量

安全约定：
- .env 必须写进 .gitignore
- 不要把 key 写进任何代码文件
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import httpx
from dotenv import load_dotenv


DEFAULT_BASE_URL = "https://open.bigmodel.cn/api/paas/v4"
DEFAULT_MODEL = "glm-4-plus"


@dataclass
class ChatClientConfig:
	api_key: str
	base_url: str
	model: str
	timeout_s: float = 60.0
	temperature: float = 0.2


def _snip(s: str, n: int = 1000) -> str:
	if len(s) > n:
		return s[:n] + "...(truncated)"
	return s


class ChatClient:
	def __init__(self, cfg: ChatClientConfig, transport: Optional[httpx.BaseTransport] = None):
		self.cfg = cfg
		self._client = httpx.Client(
			base_url=cfg.base_url,
			timeout=httpx.Timeout(cfg.timeout_s),
			headers={
				"Authorization": f"Bearer {cfg.api_key}",
				"Content-Type": "application/json",
			},
			transport=transport,
		)

	def close(self) -> None:
		self._client.close()

	def __enter__(self) -> "ChatClient":
		return self

	def __exit__(self, *exc: Any) -> None:
		self.close()

	def chat_json(self, system_prompt: str, user_prompt: str) -> Dict[str, Any]:
		payload: Dict[str, Any] = {
			"model": self.cfg.model,
			"messages": [
				{"role": "system", "content": system_prompt},
				{"role": "user", "content": user_prompt},
			],
			"temperature": self.cfg.temperature,
			"top_p": 0.9,
			"response_format": {"type": "json_object"},
		}

		r = self._client.post("/chat/completions", json=payload)

		if r.status_code < 200 or r.status_code >= 300:
			raise ValueError(f"LLM HTTP {r.status_code}: {_snip(r.text)}")

		data = r.json()

		try:
			content = data["choices"][0]["message"]["content"]
		except (KeyError, IndexError, TypeError):
			raise ValueError(f"Unexpected response shape: {_snip(json.dumps(data, ensure_ascii=False))}")

		# 有的网关会把 JSON 包在 ```json ... ``` 里
		content = content.strip()
		if content.startswith("```"):
			content = content.strip("`")
			if content.startswith("json"):
				content = content[4:]

		try:
			return json.loads(content)
		except json.JSONDecodeError:
			raise ValueError(f"LLM output is not valid JSON. content_snip={_snip(content)}")


def find_project_root(start: Optional[Path] = None) -> Path:
	"""
	从 start（缺省为当前目录）向上找第一个含 .env 的目录；找不到就返回 start。
	"""
	here = (start or Path.cwd()).resolve()
	p = here
	while p != p.parent:
		if (p / ".env").exists():
			return p
		p = p.parent
	return here


def _load_dotenv_if_present(project_root: Path) -> None:
	env_path = project_root / ".env"
	if env_path.exists():
		load_dotenv(dotenv_path=str(env_path), override=False)


def load_chat_client(
	project_root: Optional[str] = None,
	api_key: Optional[str] = None,
	base_url: Optional[str] = None,
	model: Optional[str] = None,
	timeout_s: Optional[float] = None,
) -> ChatClient:
	"""
	加载 chat client。缺 LLM_API_KEY 直接 ValueError。
	"""
	root = Path(project_root).resolve() if project_root else find_project_root()
	_load_dotenv_if_present(root)

	key = (api_key or os.environ.get("LLM_API_KEY", "")).strip()
	if not key:
		raise ValueError("Missing LLM_API_KEY (from .env or env)")

	url = (base_url or os.environ.get("LLM_BASE_URL", "")).strip() or DEFAULT_BASE_URL
	m = (model or os.environ.get("LLM_MODEL", "")).strip() or DEFAULT_MODEL
	t = float(timeout_s or os.environ.get("LLM_TIMEOUT_S", "60").strip() or 60)

	cfg = ChatClientConfig(api_key=key, base_url=url, model=m, timeout_s=t)
	return ChatClient(cfg)
