from packrender.domain.render import Render
from packrender.ports.terminal import TerminalPort


def present_render(render: Render, terminal: TerminalPort) -> None:
    terminal.output(f"{render.name}:", bold=True)
    terminal.output("")
    terminal.output(render.content)
