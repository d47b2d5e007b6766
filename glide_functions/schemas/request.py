from pydantic import BaseModel, ConfigDict, Field

from glide_functions.schemas.params import Param


class FunctionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class GenerateRequest(FunctionRequest):
    prompt: Param = None
    api_key: Param = Field(None, alias="apiKey")
    model: Param = None  # empty = default model of the OpenAI-compatible provider
    temperature: Param = None
    max_tokens: Param = Field(None, alias="maxTokens")
    attachment: Param = None


class ListModelsRequest(FunctionRequest):
    api_key: Param = Field(None, alias="apiKey")


class RandomRequest(FunctionRequest):
    key: Param = None
    min: Param = None
    max: Param = None


class CoordinatesRequest(FunctionRequest):
    location: Param = None
    format: Param = None
    precision: Param = None
