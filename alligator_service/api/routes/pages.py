"""
Landing page and health routes
"""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from ...config import Settings
from ...dependencies import get_settings
from ...schemas import HealthResponse


router = APIRouter(tags=["Pages"])


INDEX_HTML = """<!DOCTYPE html>
<html>
<head>
  <title>{app_name}</title>
  <style>
    body {{ font-family: Arial, sans-serif; margin: 0; padding-bottom: 60px; }}
    header {{ display: flex; justify-content: space-between; align-items: center; background-color: #333; padding: 10px; color: white; }}
    footer {{ display: flex; justify-content: space-around; position: fixed; bottom: 0; width: 100%; background-color: #333; color: white; }}
    button {{ padding: 10px; }}
    #postFeed {{ padding: 20px; }}
    .post {{ border: 1px solid #ccc; padding: 10px; margin-bottom: 10px; }}
    .post img {{ max-width: 100%; }}
  </style>
</head>
<body>
  <header>
    <h1>{app_name}</h1>
    <button id="notificationsBtn">Notifications</button>
  </header>

  <div id="postFeed"></div>

  <footer>
    <button id="profileBtn">Your Profile</button>
    <button id="createPostBtn">+</button>
    <button id="searchBtn">Search</button>
  </footer>

  <script>
    function authHeaders() {{
      return {{ 'Authorization': 'Bearer ' + localStorage.getItem('token') }};
    }}

    document.getElementById('profileBtn').addEventListener('click', () => {{
      alert('Profile Page');
    }});

    document.getElementById('createPostBtn').addEventListener('click', () => {{
      alert('Create Post Page');
    }});

    document.getElementById('searchBtn').addEventListener('click', () => {{
      alert('Search Page');
    }});

    document.getElementById('notificationsBtn').addEventListener('click', async () => {{
      const res = await fetch('/notifications', {{ headers: authHeaders() }});
      if (!res.ok) {{
        alert('Please log in first');
        return;
      }}
      const notifications = await res.json();
      alert('Notifications: ' + JSON.stringify(notifications));
    }});

    async function loadPosts() {{
      const res = await fetch('/posts', {{ headers: authHeaders() }});
      if (!res.ok) {{
        return;
      }}
      const posts = await res.json();
      const postFeed = document.getElementById('postFeed');
      posts.forEach(post => {{
        const item = document.createElement('div');
        item.className = 'post';

        const text = document.createElement('p');
        text.textContent = post.content || '';
        item.appendChild(text);

        if (post.image) {{
          const img = document.createElement('img');
          img.src = post.image;
          item.appendChild(img);
        }}

        const stats = document.createElement('p');
        stats.textContent = 'Likes: ' + post.likes + ' | Views: ' + post.views;
        item.appendChild(stats);

        postFeed.appendChild(item);
      }});
    }}
    loadPosts();
  </script>
</body>
</html>
"""


@router.get("/", response_class=HTMLResponse)
async def index(settings: Settings = Depends(get_settings)):
    """Landing page with a minimal client"""
    return HTMLResponse(INDEX_HTML.format(app_name=settings.APP_NAME))


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_settings)):
    """Health check endpoint"""
    return HealthResponse(
        service=settings.APP_NAME,
        version=settings.APP_VERSION,
        status="healthy",
        timestamp=datetime.now(timezone.utc)
    )
