"""Operator-facing HTML served by the backend itself.

These pages only talk to the JSON API (``/login``, ``/logout`` and
``/api/submissions``); they hold no logic of their own.
"""

LOGIN_PAGE = """<!doctype html>
<html>
<head><meta charset="utf-8"><meta name="viewport" content="width=device-width,initial-scale=1"><title>Login</title></head>
<body style="font-family:system-ui,Arial;margin:24px">
  <h1>Admin Login</h1>
  <form id="f">
    <input id="key" name="key" type="password" placeholder="ADMIN_KEY" style="padding:8px;width:320px" />
    <button type="submit" style="padding:8px 12px;margin-left:8px">Login</button>
  </form>
  <div id="msg" style="margin-top:12px;color:#a00"></div>
  <script>
    document.getElementById('f').addEventListener('submit', async (e) => {
      e.preventDefault();
      const key = document.getElementById('key').value;
      try {
        const r = await fetch('/login', {
          method: 'POST',
          headers: {'Content-Type': 'application/json'},
          body: JSON.stringify({ key }),
          credentials: 'same-origin'
        });
        if (!r.ok) throw new Error('Login failed');
        location.href = '/responses';
      } catch (err) { document.getElementById('msg').innerText = err.message }
    })
  </script>
</body>
</html>
"""

RESPONSES_PAGE = """<!doctype html>
<html>
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width,initial-scale=1" />
  <title>Submissions</title>
  <link rel="stylesheet" href="/server/index.css" />
</head>
<body>
  <h1>Saved Submissions</h1>
  <div id="list"><div id="spinner" class="spinner"></div></div>
  <div class="submissions-container" id="submissions"></div>
  <script>
    function esc(value) {
      return String(value == null ? '' : value)
        .replace(/&/g, '&amp;').replace(/</g, '&lt;').replace(/>/g, '&gt;').replace(/"/g, '&quot;');
    }

    function row(label, value) {
      return '<div class="card-row"><span class="card-label">' + label + ':</span> ' + esc(value) + '</div>';
    }

    async function load() {
      const list = document.getElementById('list');
      document.getElementById('spinner').style.display = 'block';
      let authorized = false;
      let submissions = [];
      try {
        const r = await fetch('/api/submissions');
        if (r.ok) {
          authorized = true;
          const j = await r.json();
          submissions = j.submissions || [];
        }
      } catch (e) { authorized = false; }
      document.getElementById('spinner').style.display = 'none';

      if (!authorized) {
        const loginDiv = document.createElement('div');
        loginDiv.style.marginBottom = '12px';
        loginDiv.innerHTML = '<input id="keyInput" type="password" placeholder="ADMIN_KEY" style="padding:8px;margin-right:8px" />' +
          '<button id="loginBtn" class="button">Login</button>';
        list.appendChild(loginDiv);
        document.getElementById('loginBtn').addEventListener('click', async () => {
          const key = document.getElementById('keyInput').value;
          if (!key) return alert('Enter key');
          try {
            const r = await fetch('/login', {
              method: 'POST',
              headers: {'Content-Type': 'application/json'},
              body: JSON.stringify({ key })
            });
            if (!r.ok) throw new Error('Unauthorized');
            location.reload();
          } catch (err) { alert('Login failed: ' + err.message); }
        });
        return;
      }

      list.innerHTML = '<div style="margin-bottom:12px"><button id="logout" class="logout-button">Logout</button></div>';
      document.getElementById('logout').addEventListener('click', async () => {
        try { await fetch('/logout', { method: 'POST' }) } catch (e) {}
        location.reload();
      });

      const container = document.getElementById('submissions');
      if (submissions.length === 0) {
        container.innerHTML = '<i>No submissions</i>';
        return;
      }
      container.innerHTML = submissions.map(s =>
        '<div class="card"><h3 class="card-title">Submission</h3>' +
        row('Name', s.name) +
        row('Email', s.email) +
        row('Type', s.siteType) +
        row('Budget', s.budget ? '$' + s.budget : '') +
        '<div class="card-row"><span class="card-label">Description:</span> <span class="card-desc">' + esc(s.description) + '</span></div>' +
        '<div class="card-meta"><span class="card-label">Submitted:</span> ' + esc(new Date(s.ts).toLocaleString()) + '</div>' +
        '</div>'
      ).join('');
    }
    load();
  </script>
</body>
</html>
"""

STYLESHEET = """body {
  font-family: system-ui, Arial, sans-serif;
  margin: 24px;
  background: #f6f7f9;
  color: #1d2330;
}

.spinner {
  display: none;
  width: 28px;
  height: 28px;
  border: 3px solid #d5d9e0;
  border-top-color: #3b6fd8;
  border-radius: 50%;
  animation: spin 0.8s linear infinite;
}

@keyframes spin {
  to { transform: rotate(360deg); }
}

.submissions-container {
  display: grid;
  grid-template-columns: repeat(auto-fill, minmax(280px, 1fr));
  gap: 16px;
}

.card {
  background: #fff;
  border-radius: 10px;
  padding: 16px;
  box-shadow: 0 1px 3px rgba(0, 0, 0, 0.08);
}

.card-title {
  margin: 0 0 8px;
  font-size: 1.05rem;
}

.card-row,
.card-meta {
  margin: 4px 0;
  word-break: break-word;
}

.card-label {
  font-weight: 600;
}

.card-desc {
  white-space: pre-wrap;
}

.card-meta {
  color: #667085;
  font-size: 0.9rem;
}

.button,
.logout-button {
  padding: 8px 12px;
  border: 0;
  border-radius: 6px;
  background: #3b6fd8;
  color: #fff;
  cursor: pointer;
}

.logout-button {
  background: #b42318;
}
"""
