"""Single-page browser client served by the API."""

INDEX_HTML = """<!doctype html>
<html lang="tr">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>NutriAI</title>
    <style>
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 2rem; }
      nav button, form button { padding: 0.4rem 0.8rem; margin-right: 0.5rem; }
      label { display: block; margin-top: 0.5rem; }
      input, select, textarea { padding: 0.3rem 0.5rem; width: 320px; }
      .meal { border-bottom: 1px solid #eee; padding: 0.4rem 0; }
      .error { color: #b91c1c; }
    </style>
  </head>
  <body>
    <nav>
      <button onclick="act('reset')">Başa Dön</button>
      <button onclick="act('tracker')">İlerleme Takibi</button>
    </nav>
    <main id="main">Yükleniyor...</main>
    <script>
      let sessionId = null;
      const main = document.getElementById('main');

      async function call(method, path, body) {
        const res = await fetch(path, {
          method,
          headers: { 'Content-Type': 'application/json' },
          body: body ? JSON.stringify(body) : undefined
        });
        const data = await res.json();
        if (!res.ok) throw new Error(data.detail || res.status);
        return data;
      }

      async function act(action) {
        render(await call('POST', `/sessions/${sessionId}/${action}`));
      }

      function render(state) {
        sessionId = state.session_id;
        const views = {
          form: renderForm, loading: () => 'Planınız hazırlanıyor...',
          error: s => `<p class="error">${s.message}</p>`,
          questions: renderQuestions, dashboard: renderDashboard,
          tracker: renderTracker
        };
        main.innerHTML = views[state.view](state);
        bind(state);
      }

      function renderForm() {
        return `<form id="profile">
          <label>Yaş <input name="age" type="number" min="1" max="120" required></label>
          <label>Cinsiyet <select name="gender">
            <option value="male">Erkek</option><option value="female">Kadın</option>
            <option value="other">Diğer</option></select></label>
          <label>Kilo (kg) <input name="weight" type="number" step="0.1" required></label>
          <label>Boy (cm) <input name="height" type="number" required></label>
          <label>Aktivite <select name="activityLevel">
            <option>sedentary</option><option>light</option>
            <option selected>moderate</option><option>active</option>
            <option>very_active</option></select></label>
          <label>Hedef <select name="goal"><option>lose</option>
            <option selected>maintain</option><option>gain</option></select></label>
          <label>Alerjiler <input name="allergies"></label>
          <label>Sevilmeyenler <input name="dislikedFoods"></label>
          <label>Sağlık durumu <input name="medicalConditions"></label>
          <label>Özel istekler <textarea name="extraNotes"></textarea></label>
          <button type="submit">Planımı Oluştur</button></form>`;
      }

      function renderQuestions(state) {
        return `<form id="answers">${state.questions.map(q =>
          `<label>${q}<textarea data-q="${encodeURIComponent(q)}" required></textarea></label>`
        ).join('')}<button type="submit">Gönder</button></form>`;
      }

      function renderDashboard(state) {
        const plan = state.plan;
        const days = plan.weeklyPlan.map(day => `<h3>${day.day}</h3>` +
          day.meals.map(m => `<div class="meal"><b>${m.time}</b> ${m.dish}
            (${m.calories} kcal)
            <button onclick="fav('${m.id}')">${state.favorite_ids.includes(m.id)
              ? '★' : '☆'}</button></div>`).join('')).join('');
        return `<h2>Plan Özetiniz</h2><p>${plan.summary}</p>
          <p>Günlük kalori: ${plan.dailyCalories} kcal, BMR: ~${state.bmr} kcal</p>
          <p>${state.macro_chart.map(m => `${m.name}: ${m.percent}%`).join(' · ')}</p>
          <a href="/sessions/${sessionId}/export.pdf">PDF indir</a>
          <button onclick="shopping()">Alışveriş Listesi</button>
          <ul id="shopping"></ul>${days}`;
      }

      function renderTracker(state) {
        const rows = state.weight_history.map(e => `<li>${e.date}: ${e.weight} kg
          <button onclick="delWeight('${e.date}')">Sil</button></li>`).join('');
        return `<h2>İlerleme Takibi</h2><form id="weight">
          <input name="weight" type="number" step="0.1" min="20" max="300" required>
          <input name="date" type="date" required>
          <button type="submit">Kaydet</button></form><ul>${rows}</ul>`;
      }

      function bind(state) {
        const profile = document.getElementById('profile');
        if (profile) profile.onsubmit = async e => {
          e.preventDefault();
          const data = Object.fromEntries(new FormData(profile));
          main.innerHTML = 'Planınız hazırlanıyor...';
          render(await call('POST', `/sessions/${sessionId}/profile`, data));
        };
        const answers = document.getElementById('answers');
        if (answers) answers.onsubmit = async e => {
          e.preventDefault();
          const data = {};
          answers.querySelectorAll('textarea').forEach(t => {
            data[decodeURIComponent(t.dataset.q)] = t.value;
          });
          main.innerHTML = 'Planınız hazırlanıyor...';
          render(await call('POST', `/sessions/${sessionId}/answers`, { answers: data }));
        };
        const weight = document.getElementById('weight');
        if (weight) {
          weight.date.value = new Date().toISOString().split('T')[0];
          weight.onsubmit = async e => {
            e.preventDefault();
            await call('POST', '/weights', Object.fromEntries(new FormData(weight)));
            render(await call('GET', `/sessions/${sessionId}`));
          };
        }
      }

      async function fav(id) {
        await call('POST', `/favorites/${encodeURIComponent(id)}/toggle`);
        render(await call('GET', `/sessions/${sessionId}`));
      }

      async function delWeight(date) {
        await call('DELETE', `/weights/${date}`);
        render(await call('GET', `/sessions/${sessionId}`));
      }

      async function shopping() {
        const data = await call('GET', `/sessions/${sessionId}/shopping-list`);
        document.getElementById('shopping').innerHTML =
          data.items.map(i => `<li>${i}</li>`).join('');
      }

      call('POST', '/sessions').then(render);
    </script>
  </body>
</html>
"""
