import functools
from rich.console import Console
console = Console()


def printer(start_msg, end_msg, fail_msg=None):
    """被装饰函数返回退出码：0 打印 end_msg，非0 打印 fail_msg"""
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            console.print(f"[bold blue]<CallGen> :hourglass_flowing_sand: {start_msg}[/bold blue]")

            exit_code = func(*args, **kwargs)
            if not exit_code:
                console.print(f"[bold green]<CallGen> :white_check_mark: {end_msg}[/bold green]")
            elif fail_msg:
                console.print(f"[bold red]<CallGen> :x: {fail_msg}[/bold red]")

            return exit_code
        return wrapper
    return decorator


def print_message(message, style="bold blue", prefix="<CallGen>"):
    console.print(f"[{style}]{prefix} {message}[/{style}]")
