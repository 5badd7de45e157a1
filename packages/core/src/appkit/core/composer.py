"""Prompt Composer -- TaskSpec -> 有序 Message 列表

纯函数，无 I/O、无随机性、无失败路径：
空字段通过省略对应行处理，而不是抛错。
输出长度恒为 3 + 2 * len(spec.examples)。
"""

from collections.abc import Iterable

from .models import Message, Role, TaskSpec

CITATIONS_LINE = "Citations: include sources and URLs when making claims."


def build_system_prompt(spec: TaskSpec) -> str:
    """system 消息文本"""
    return f"You are {spec.role}. Write for {spec.audience}. Follow constraints strictly."


def build_instruction(spec: TaskSpec) -> str:
    """第一条 user 消息：目标、约束、引用、风格、验收标准

    行顺序固定，数据为空的行直接省略。
    """
    acceptance = " ".join(f"{i}. {item}" for i, item in enumerate(spec.acceptance, start=1))
    lines = [
        f"Goal: {spec.goal}" if spec.goal else None,
        f"Constraints: {'; '.join(spec.constraints)}" if spec.constraints else None,
        CITATIONS_LINE if spec.citations else None,
        (
            f"Style: {', '.join(spec.style)}. "
            f"Formality: {spec.formality.value}. Length: {spec.length.value}."
        ),
        f"Acceptance criteria: {acceptance}" if spec.acceptance else None,
    ]
    return "\n".join(line for line in lines if line is not None)


def build_inputs_block(spec: TaskSpec) -> str:
    """第二条 user 消息：Inputs 列表，保持原始顺序"""
    return "\n".join(["Inputs:", *(f"- {item.label}: {item.value}" for item in spec.inputs)])


def compose(spec: TaskSpec) -> list[Message]:
    """将 TaskSpec 组装为 system + user + user + (user, assistant)* 消息序列

    Args:
        spec: 结构化任务描述

    Returns:
        Message 列表，长度为 3 + 2 * len(spec.examples)
    """
    messages = [
        Message(role=Role.SYSTEM, content=build_system_prompt(spec)),
        Message(role=Role.USER, content=build_instruction(spec)),
        Message(role=Role.USER, content=build_inputs_block(spec)),
    ]
    for example in spec.examples:
        messages.append(Message(role=Role.USER, content=example.input))
        messages.append(Message(role=Role.ASSISTANT, content=example.output))
    return messages


def to_provider_messages(messages: Iterable[Message]) -> list[dict[str, str]]:
    """转换为 provider 层的 messages 格式"""
    return [m.as_provider_dict() for m in messages]
