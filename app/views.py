"""서버 측 HTML 뷰 — 관리 페이지, 로그아웃, 권한 실패.

Server-side HTML views — manage page, logout and authorization failure.
Pages are small inline templates; every page tags its <body> with
data-view="<view name>" so scripts and tests can tell them apart.
"""

from html import escape

from fastapi.responses import HTMLResponse

from app.schemas.registered_service import ViewModel

PAGE_HTML = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{{TITLE}}</title>
<style>
body{font-family:system-ui,sans-serif;background:#111;color:#eee;margin:0;padding:40px}
.card{background:#1a1a2e;border:1px solid #333;border-radius:12px;padding:32px;max-width:960px;margin:0 auto}
h2{margin:0 0 16px}
table{width:100%;border-collapse:collapse;font-size:14px}
th,td{padding:8px;border-bottom:1px solid #333;text-align:left}
.muted{color:#aaa;font-size:13px}
a{color:#6c5ce7}
</style>
</head>
<body data-view="{{VIEW}}">
<div class="card">
{{CONTENT}}
</div>
</body>
</html>"""

MANAGE_CONTENT = """<h2>Manage Services</h2>
<p class="muted">Management application service: <code id="defaultServiceUrl">{{DEFAULT_SERVICE_URL}}</code></p>
<table id="services">
<thead><tr><th>Name</th><th>Service URL</th><th>Order</th><th></th></tr></thead>
<tbody></tbody>
</table>
<script>
function ajax(method, url, body) {
  return fetch(url, {method: method, body: body, headers: {"X-Requested-With": "XMLHttpRequest"}});
}
async function loadServices() {
  const res = await ajax("GET", "getServices");
  const data = await res.json();
  const tbody = document.querySelector("#services tbody");
  tbody.innerHTML = "";
  for (const svc of data.services) {
    const tr = document.createElement("tr");
    tr.dataset.id = svc.id;
    for (const value of [svc.name, svc.serviceId, svc.evaluationOrder]) {
      const td = document.createElement("td");
      td.textContent = value;
      tr.appendChild(td);
    }
    const del = document.createElement("td");
    const link = document.createElement("a");
    link.href = "#";
    link.textContent = "Delete";
    link.onclick = async () => {
      const form = new FormData();
      form.append("id", svc.id);
      await ajax("POST", "deleteRegisteredService", form);
      loadServices();
      return false;
    };
    del.appendChild(link);
    tr.appendChild(del);
    tbody.appendChild(tr);
  }
}
loadServices();
</script>"""

LOGOUT_CONTENT = """<h2>Logged Out</h2>
<p>You have successfully logged out of the Services Management web application.</p>
<p><a href="manage">Log in again</a></p>"""

AUTHORIZATION_FAILURE_CONTENT = """<h2>Authorization Failure</h2>
<p>You are not authorized to use the Services Management web application.</p>"""

_TITLES: dict[str, str] = {
    "manage": "Services Management",
    "logout": "Logged Out",
    "authorizationFailure": "Authorization Failure",
}


def _content(view: ViewModel) -> str:
    """뷰 이름에 맞는 본문을 생성합니다 — Build the body for a view name."""
    if view.view_name == "manage":
        url: str = escape(str(view.model.get("defaultServiceUrl", "")))
        return MANAGE_CONTENT.replace("{{DEFAULT_SERVICE_URL}}", url)
    if view.view_name == "logout":
        return LOGOUT_CONTENT
    if view.view_name == "authorizationFailure":
        return AUTHORIZATION_FAILURE_CONTENT
    raise ValueError(f"Unknown view: {view.view_name}")


def render(view: ViewModel) -> HTMLResponse:
    """뷰 모델을 HTML 응답으로 렌더링합니다.

    Render a view model into an HTML response.

    Args:
        view: 렌더링할 뷰 모델 (View model to render)

    Returns:
        HTMLResponse: 렌더링된 페이지 (Rendered page)
    """
    html: str = (
        PAGE_HTML.replace("{{TITLE}}", _TITLES.get(view.view_name, view.view_name))
        .replace("{{VIEW}}", escape(view.view_name))
        .replace("{{CONTENT}}", _content(view))
    )
    return HTMLResponse(html)
