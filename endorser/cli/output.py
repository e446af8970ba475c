from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.styles import Style
from prompt_toolkit import print_formatted_text


styles = {
    "main": "#ffffff bold",
    "normal": "#29bf12",
    "error": "#f71735",
    "info": "#d1d8df",
    "warning": "#fcf622 italic",
}

prefixes = {
    "main": "\n",
    "normal": "-> result: ",
    "error": "-> error: ",
    "info": "-> ",
    "warning": "\nwarning! ",
}


suffixes = {
    "main": "\n",
    "normal": "\n",
    "error": "\n",
    "info": "",
    "warning": "\n",
}

style_template = Style.from_dict(styles)


def format_text(text, style):

    if style in styles:
        prefix = prefixes.get(style)
        suffix = suffixes.get(style)
        text_template = f"class:{style}"
        text = FormattedText(
            [(text_template, prefix), (text_template, text), (text_template, suffix)]
        )
        return text

    return None


def format_peers(peers):
    lines = [
        f"{peer.get_name()} ({peer.get_mspid()} {peer.get_role()})" for peer in peers
    ]
    return "\n   ".join(lines)


def print_cli(out, err=None, style="info"):

    if out:
        text = format_text(out, style)
    elif err:
        text = format_text(err, "error")
    else:
        text = None

    if text:
        print_formatted_text(text, style=style_template)
