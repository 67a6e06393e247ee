"""Zhipu AI GLM adapter."""

from .openai_compatible import OpenAICompatibleProvider, VendorCompletion, VendorErrorDetail


class GLMCompletion(VendorCompletion):
    # GLM answers carry a `created` timestamp but no `object` tag.
    created: int | None = None


class GLMProvider(OpenAICompatibleProvider):
    vendor = "glm"
    label = "GLM"
    completion_model = GLMCompletion

    def object_tag(self, completion: VendorCompletion) -> str:
        return "chat.completion"

    def error_kind(self, detail: VendorErrorDetail) -> str | None:
        # GLM reports numeric business codes as strings, e.g. "1261".
        if detail.code is not None:
            return str(detail.code)
        return detail.type
