import os

import pytest

# settings는 import 시점에 로드되므로 애플리케이션 import 전에 설정
os.environ["GEMINI_API_KEY"] = "test-key"
os.environ["PHOENIX_ENABLED"] = "false"


ARTICLE_HTML = """
<html>
  <head><title>Rocket lands</title><style>p { color: red; }</style></head>
  <body>
    <nav><p>Home | World | Science</p></nav>
    <article>
      <h1>Rocket lands on barge</h1>
      <p>The booster   touched down
         at 09:14 local time.</p>
      <p>   </p>
      <p>It was the <b>fifth</b> landing this year.</p>
    </article>
    <footer><p>Copyright 2026</p></footer>
  </body>
</html>
"""


@pytest.fixture
def article_html():
    return ARTICLE_HTML
