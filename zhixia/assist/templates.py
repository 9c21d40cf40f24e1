"""Model catalogue and prompt templates for the assist panels."""
from typing import List
from pydantic import BaseModel, Field


class ModelOption(BaseModel):
    """A model the user can pick in an assist panel."""

    id: str = Field(description="Model identifier")
    name: str = Field(description="Human-readable name")
    description: str = Field(default="", description="Short description")


class PromptTemplate(BaseModel):
    """A named group of suggested prompts."""

    id: str
    name: str
    description: str = ""
    prompts: List[str] = Field(default_factory=list)


WRITING_MODELS = [
    ModelOption(id='gpt-4', name='GPT-4', description='更强大的理解力和创造力'),
    ModelOption(id='gpt-3.5', name='GPT-3.5', description='快速响应，性价比更高'),
]

ANALYSIS_MODELS = [
    ModelOption(id='gpt-4', name='GPT-4', description='深度理解与分析能力'),
    ModelOption(id='gpt-3.5', name='GPT-3.5', description='快速分析，性价比更高'),
]

WRITING_TEMPLATES = [
    PromptTemplate(
        id='continue',
        name='续写剧情',
        description='基于当前内容智能续写后续剧情',
        prompts=[
            '继续发展当前的情节，保持故事的连贯性',
            '基于已有内容，展开新的故事发展',
            '延续当前的情感基调，推进剧情发展',
            '在保持人物性格的基础上继续故事',
        ]
    ),
    PromptTemplate(
        id='expand',
        name='扩写场景',
        description='将简单的场景描述扩展为生动的画面',
        prompts=[
            '添加更多感官描写，让场景更加立体',
            '通过细节描写增强场景的真实感',
            '加入环境与人物的互动描写',
            '强化场景的氛围和情感渲染',
        ]
    ),
    PromptTemplate(
        id='dialogue',
        name='对话生成',
        description='生成自然流畅的人物对话',
        prompts=[
            '创建自然的对话交流',
            '通过对话展现人物性格',
            '设计富有张力的对话场景',
            '用对话推动情节发展',
        ]
    ),
    PromptTemplate(
        id='emotion',
        name='情感渲染',
        description='加强文字的情感表达',
        prompts=[
            '深化人物的情感描写',
            '通过细节展现情感变化',
            '营造特定的情感氛围',
            '强化情感冲突的表达',
        ]
    ),
]

ANALYSIS_METHODS = [
    PromptTemplate(
        id='breakdown',
        name='拆书分析',
        description='分析章节的结构、情节、人物等要素',
        prompts=[
            '分析本章节的故事结构，包括开头、发展、高潮和结尾的安排',
            '分析本章节的人物塑造和性格特点',
            '评估本章节的情节发展和节奏把控',
            '探讨本章节的场景布置和氛围营造',
            '分析本章节与整体故事的关联性',
        ]
    ),
    PromptTemplate(
        id='analysis',
        name='深度分析',
        description='对章节进行全方位的文学分析',
        prompts=[
            '分析本章节的写作技巧和叙事手法',
            '评估本章节的语言风格和表达特点',
            '探讨本章节的情感层次和心理刻画',
            '分析本章节的主题思想和深层寓意',
            '评估本章节的文学价值和创新之处',
        ]
    ),
]


def _lookup(items, item_id: str, kind: str):
    for item in items:
        if item.id == item_id:
            return item
    raise KeyError(f"Unknown {kind}: {item_id}")


def get_writing_model(model_id: str) -> ModelOption:
    return _lookup(WRITING_MODELS, model_id, "model")


def get_analysis_model(model_id: str) -> ModelOption:
    return _lookup(ANALYSIS_MODELS, model_id, "model")


def get_writing_template(template_id: str) -> PromptTemplate:
    return _lookup(WRITING_TEMPLATES, template_id, "template")


def get_analysis_method(method_id: str) -> PromptTemplate:
    return _lookup(ANALYSIS_METHODS, method_id, "analysis method")
