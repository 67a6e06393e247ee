"""Alibaba Qwen adapter for the DashScope compatible-mode endpoint."""

from pydantic import BaseModel, ValidationError

from .openai_compatible import OpenAICompatibleProvider, VendorErrorDetail


class DashScopeError(BaseModel):
    code: str | None = None
    message: str = ""
    request_id: str | None = None


class QwenProvider(OpenAICompatibleProvider):
    vendor = "qwen"
    label = "Qwen"

    def parse_error(self, body: str) -> VendorErrorDetail | None:
        detail = super().parse_error(body)
        if detail is not None:
            return detail
        # Gateway-level failures use the native DashScope envelope: {code, message, request_id}.
        try:
            native = DashScopeError.model_validate_json(body)
        except ValidationError:
            return None
        return VendorErrorDetail(message=native.message, code=native.code)
