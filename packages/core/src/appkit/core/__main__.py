"""CLI 入口模块 -- python -m appkit.core <command>

支持的命令：
  export-spec  输出已持久化的 TaskSpec JSON
  compose      输出当前 TaskSpec 组装后的 messages JSON
  reset        清空检索语料（外部重置）
"""

import asyncio
import json
import sys

from .composer import compose, to_provider_messages
from .config import get_db_path

COMMANDS = {
    "export-spec": "输出已持久化的 TaskSpec JSON",
    "compose": "输出组装后的 messages JSON",
    "reset": "清空检索语料",
}


def _usage() -> None:
    print("用法: python -m appkit.core <command>")
    print("命令:")
    for name, desc in COMMANDS.items():
        print(f"  {name:<12} {desc}")


def main() -> None:
    """CLI 主入口"""
    if len(sys.argv) < 2:
        _usage()
        sys.exit(1)

    command = sys.argv[1]
    if command not in COMMANDS:
        print(f"未知命令: {command}")
        print(f"可用命令: {', '.join(COMMANDS)}")
        sys.exit(1)

    asyncio.run(run_command(command))


async def run_command(command: str) -> None:
    """打开数据库执行命令"""
    from .store import create_store_group

    store_group = await create_store_group(get_db_path())
    try:
        repo = store_group.state_repository
        if command == "export-spec":
            spec = await repo.load_spec()
            print(spec.export_json())
        elif command == "compose":
            spec = await repo.load_spec()
            print(json.dumps(to_provider_messages(compose(spec)), ensure_ascii=False, indent=2))
        elif command == "reset":
            await repo.clear_documents()
            print("检索语料已清空")
    finally:
        await store_group.conn.close()


if __name__ == "__main__":
    main()
