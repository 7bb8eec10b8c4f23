"""HTML pages for the riddle.

Pages are built from fixed templates. Nothing a client submits is ever
written into a page; the only interpolated values are server-side
constants and integers.
"""

from __future__ import annotations

from html import escape

from riddle_gate.services.puzzle import RIDDLE_LINES

ARTIFACT_URL = "/audio.wav"

PAGE_STYLE = """
<style>
  @import url('https://fonts.googleapis.com/css2?family=Poppins:wght@400;700&display=swap');
  body {
    font-family: 'Poppins', sans-serif;
    background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
    color: #f0f0f0;
    display: flex;
    flex-direction: column;
    align-items: center;
    justify-content: center;
    height: 100vh;
    margin: 0;
    text-align: center;
  }
  h1, h2 { margin: 0 0 20px 0; text-shadow: 0 2px 4px rgba(0,0,0,0.4); }
  p { font-size: 1.1rem; margin: 0 0 24px 0; opacity: 0.9; }
  form input {
    font-size: 1.1rem;
    padding: 12px 16px;
    border-radius: 40px;
    border: none;
    width: 260px;
    outline: none;
  }
  form input:focus { box-shadow: 0 0 12px #efb3ff; }
  button {
    margin-top: 20px;
    font-size: 1.1rem;
    padding: 12px 32px;
    border-radius: 40px;
    border: none;
    background: #ff5ec4;
    color: white;
    cursor: pointer;
  }
  button:hover { background: #d7289f; }
  a.download-link {
    display: inline-block;
    margin-top: 24px;
    padding: 12px 36px;
    font-size: 1.2rem;
    border-radius: 40px;
    background: #3fffcf;
    color: #2b2b2b;
    font-weight: 700;
    text-decoration: none;
    animation: pulse 2.3s infinite;
  }
  a.tryagain-link { margin-top: 24px; display: inline-block; color: #f0c0ff; }
  body.warning { background: #ffeeee; color: #402020; }
  @keyframes pulse {
    0%, 100% { box-shadow: 0 4px 15px #3fffcfaa; }
    50% { box-shadow: 0 8px 24px #3fffcfcc; }
  }
  .fade-in { animation: fadeIn 1.2s ease forwards; opacity: 0; }
  @keyframes fadeIn { to { opacity: 1; } }
</style>
"""


def _page(title: str, body: str, *, body_class: str = "") -> str:
    class_attr = f' class="{escape(body_class)}"' if body_class else ""
    return (
        "<!DOCTYPE html>\n"
        "<html>\n"
        "<head>\n"
        '<meta charset="utf-8">\n'
        f"<title>{escape(title)}</title>\n"
        f"{PAGE_STYLE}"
        "</head>\n"
        f"<body{class_attr}>\n"
        f'<div class="fade-in">\n{body}\n</div>\n'
        "</body>\n"
        "</html>\n"
    )


def render_challenge() -> str:
    """Return the riddle page with the answer form."""
    riddle = "<br>\n".join(escape(line) for line in RIDDLE_LINES)
    body = (
        "<h1>Welcome to the Puzzle Challenge</h1>\n"
        f"<p><em>{riddle}</em></p>\n"
        '<form method="POST" action="/check">\n'
        '  <input name="answer" autocomplete="off" required '
        'placeholder="Type your answer here"/>\n'
        "  <br />\n"
        '  <button type="submit">Submit</button>\n'
        "</form>"
    )
    return _page("Riddle Puzzle", body)


def render_result(is_correct: bool) -> str:
    """Return the reward page when correct, or an invitation to retry."""
    if is_correct:
        body = (
            "<h2>Well done! Your answer is correct.</h2>\n"
            "<p>Echoes will guide you to the audio puzzle. "
            "Download and listen carefully!</p>\n"
            f'<a href="{ARTIFACT_URL}" download class="download-link">'
            "Download audio.wav</a>"
        )
        return _page("Correct Answer", body)

    body = (
        "<h2>Oops! That's not the right answer.</h2>\n"
        '<a href="/" class="tryagain-link">Try again</a>'
    )
    return _page("Try Again", body)


def render_rate_limited(retry_after: int) -> str:
    """Return the page shown with a 429, stating how long to wait."""
    body = (
        "<h1>Too Many Requests!</h1>\n"
        f"<p>Please wait {int(retry_after)} seconds before trying again.</p>"
    )
    return _page("Too Many Requests", body, body_class="warning")


def render_error(title: str, message: str) -> str:
    """Return a generic error page; both texts are HTML-escaped."""
    body = (
        f"<h2>{escape(title)}</h2>\n"
        f"<p>{escape(message)}</p>\n"
        '<a href="/" class="tryagain-link">Back to the riddle</a>'
    )
    return _page(title, body, body_class="warning")
