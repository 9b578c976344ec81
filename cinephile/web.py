"""HTML page rendering for the home and result screens."""

from __future__ import annotations

import html
import json
from textwrap import dedent
from typing import Sequence

from .catalog import Genre
from .config import Settings


APP_TEMPLATE = dedent(
    """
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>__APP_NAME__ · Curated Indian Cinema</title>
    <style>
        :root {
            color-scheme: dark;
            font-family: 'Inter', 'Segoe UI', system-ui, -apple-system, sans-serif;
            --surface: rgba(255, 255, 255, 0.03);
            --outline: rgba(255, 255, 255, 0.08);
            --text-primary: #f1f5f9;
            --text-muted: #94a3b8;
            --accent: #fda4af;
            background: #020617;
            color: var(--text-primary);
        }
        * {
            box-sizing: border-box;
        }
        body {
            margin: 0;
            min-height: 100vh;
            background: radial-gradient(circle at top left, rgba(79, 70, 229, 0.2), transparent 50%),
                radial-gradient(circle at bottom right, rgba(219, 39, 119, 0.12), transparent 45%),
                #020617;
        }
        main {
            max-width: 1080px;
            margin: 0 auto;
            padding: 3rem 1.5rem 4rem;
        }
        header h1 {
            margin: 0;
            font-size: clamp(2rem, 5vw, 3rem);
            background: linear-gradient(90deg, #fdba74, #fda4af, #a5b4fc);
            -webkit-background-clip: text;
            color: transparent;
        }
        header p {
            margin-top: 0.5rem;
            color: var(--text-muted);
            letter-spacing: 0.2em;
            text-transform: uppercase;
            font-size: 0.8rem;
        }
        .card {
            background: var(--surface);
            border: 1px solid var(--outline);
            border-radius: 1.5rem;
            padding: 1.5rem;
            backdrop-filter: blur(16px);
        }
        .mood textarea {
            width: 100%;
            min-height: 6rem;
            border-radius: 1rem;
            border: 1px solid var(--outline);
            background: rgba(0, 0, 0, 0.3);
            color: inherit;
            padding: 1rem;
            font: inherit;
        }
        button {
            font: inherit;
            cursor: pointer;
            border-radius: 999px;
            border: 1px solid var(--outline);
            background: rgba(255, 255, 255, 0.08);
            color: inherit;
            padding: 0.6rem 1.4rem;
        }
        button:disabled {
            opacity: 0.5;
            cursor: not-allowed;
        }
        .genres {
            display: grid;
            grid-template-columns: repeat(auto-fill, minmax(220px, 1fr));
            gap: 1rem;
            margin-top: 2rem;
        }
        .genre {
            text-align: left;
            border-radius: 1.5rem;
            padding: 1.5rem;
        }
        .genre .emoji {
            font-size: 2rem;
        }
        .genre small {
            display: block;
            color: var(--text-muted);
            margin-top: 0.5rem;
        }
        .result {
            display: grid;
            grid-template-columns: minmax(160px, 1fr) 2fr;
            gap: 2rem;
            align-items: center;
        }
        .poster {
            font-size: 7rem;
            text-align: center;
            transition: transform 0.15s ease, filter 0.15s ease;
        }
        .poster.spinning {
            transform: scale(0.95) rotate(-4deg);
            filter: blur(2px);
        }
        .badge {
            display: inline-block;
            margin-top: 1rem;
            padding: 0.3rem 0.9rem;
            border-radius: 999px;
            border: 1px solid var(--outline);
            font-size: 0.8rem;
            color: var(--text-muted);
        }
        .extra {
            margin: 1.5rem 0;
            padding: 1rem 1.25rem;
            border-left: 3px solid var(--accent);
            background: rgba(0, 0, 0, 0.25);
            border-radius: 0.75rem;
        }
        .actions {
            display: flex;
            flex-wrap: wrap;
            gap: 0.75rem;
            margin-top: 1.5rem;
        }
        .notice {
            color: var(--accent);
            min-height: 1.5rem;
        }
        [hidden] {
            display: none !important;
        }
    </style>
</head>
<body>
<main>
    <header>
        <h1>__APP_NAME__</h1>
        <p>Curated Indian Cinema</p>
    </header>

    <p class="notice" id="notice" role="status"></p>

    <section id="home-view">
        <div class="card mood">
            <label for="mood-input">Tell the AI how you feel</label>
            <textarea id="mood-input" placeholder="e.g., I just had a breakup and need something inspiring, or I want a mind-bending thriller that keeps me guessing..."></textarea>
            <div class="actions">
                <button id="mood-submit" type="button">Find My Movie</button>
                <span class="badge">Powered by __OPENROUTER_MODEL__</span>
            </div>
        </div>
        <div class="genres" id="genre-grid"></div>
    </section>

    <section id="result-view" hidden>
        <button id="back" type="button">&larr; Back</button>
        <div class="card result" style="margin-top: 1.5rem;">
            <div>
                <div class="poster" id="poster">🎬</div>
                <div style="text-align: center;"><span class="badge" id="genre-badge"></span></div>
            </div>
            <div>
                <h2 id="movie-title">Shuffling...</h2>
                <p id="movie-year" class="badge"></p>
                <p id="movie-blurb"></p>
                <div class="actions" id="extra-actions">
                    <button type="button" data-extra="quote">Iconic Quote</button>
                    <button type="button" data-extra="trivia">Trivia</button>
                </div>
                <blockquote class="extra" id="extra" hidden></blockquote>
                <div class="actions">
                    <button type="button" id="trailer">Watch Trailer</button>
                    <button type="button" id="replay">Shuffle Again</button>
                    <button type="button" id="ask-again" hidden>Ask AI Again</button>
                </div>
            </div>
        </div>
    </section>
</main>
<script>
    (function () {
        const boot = JSON.parse('__BOOT_JSON__');
        const notice = document.getElementById('notice');
        const homeView = document.getElementById('home-view');
        const resultView = document.getElementById('result-view');
        const moodInput = document.getElementById('mood-input');
        const moodSubmit = document.getElementById('mood-submit');
        const poster = document.getElementById('poster');
        const genreBadge = document.getElementById('genre-badge');
        const titleEl = document.getElementById('movie-title');
        const yearEl = document.getElementById('movie-year');
        const blurbEl = document.getElementById('movie-blurb');
        const extraActions = document.getElementById('extra-actions');
        const extraEl = document.getElementById('extra');
        const trailerBtn = document.getElementById('trailer');
        const replayBtn = document.getElementById('replay');
        const askAgainBtn = document.getElementById('ask-again');
        let state = null;
        let pollTimer = null;

        async function call(method, path, body) {
            const response = await fetch(path, {
                method,
                headers: { 'Content-Type': 'application/json' },
                body: body === undefined ? undefined : JSON.stringify(body),
            });
            const payload = await response.json().catch(() => ({}));
            if (!response.ok) {
                const detail = typeof payload.detail === 'string' ? payload.detail : 'Request failed';
                const error = new Error(detail);
                error.status = response.status;
                throw error;
            }
            return payload;
        }

        function render(next) {
            state = next;
            const inResult = state.phase !== 'idle';
            homeView.hidden = inResult;
            resultView.hidden = !inResult;
            moodSubmit.disabled = state.mood_pending || !moodInput.value.trim();
            moodSubmit.textContent = state.mood_pending ? 'Analyzing Mood...' : 'Find My Movie';
            if (!inResult) {
                return;
            }
            const animating = state.phase === 'animating';
            const movie = state.displayed_movie;
            poster.classList.toggle('spinning', animating);
            poster.textContent = movie ? movie.emoji : '🎰';
            genreBadge.textContent = state.active_genre || '';
            titleEl.textContent = movie ? movie.title : 'Shuffling...';
            yearEl.textContent = movie ? movie.year : '';
            blurbEl.textContent = state.blurb || '';
            extraActions.hidden = animating;
            extraActions.querySelectorAll('button').forEach((button) => {
                button.disabled = Boolean(state.extra_pending);
            });
            if (state.extra) {
                extraEl.hidden = false;
                extraEl.textContent = state.extra.text;
            } else {
                extraEl.hidden = true;
                extraEl.textContent = '';
            }
            trailerBtn.disabled = !state.trailer_url;
            replayBtn.hidden = state.is_ai_pick;
            askAgainBtn.hidden = !state.is_ai_pick;
            replayBtn.disabled = animating;
            replayBtn.textContent = animating ? 'Shuffling...' : 'Shuffle Again';
        }

        function schedulePoll() {
            if (pollTimer) {
                return;
            }
            pollTimer = setInterval(async () => {
                const next = await call('GET', '/api/state');
                render(next);
                if (next.phase !== 'animating' && !next.mood_pending && !next.extra_pending) {
                    clearInterval(pollTimer);
                    pollTimer = null;
                }
            }, boot.pollIntervalMs);
        }

        async function send(method, path, body) {
            try {
                const next = await call(method, path, body);
                render(next);
                return next;
            } catch (error) {
                notice.textContent = error.message;
                return null;
            }
        }

        function restoreMoodButton() {
            const pending = Boolean(state && state.mood_pending);
            moodSubmit.disabled = pending || !moodInput.value.trim();
            moodSubmit.textContent = pending ? 'Analyzing Mood...' : 'Find My Movie';
        }

        async function pickGenre(name) {
            notice.textContent = '';
            try {
                render(await call('POST', '/api/pick/genre', { genre: name }));
                schedulePoll();
            } catch (error) {
                notice.textContent = error.message;
            }
        }

        boot.genres.forEach((genre) => {
            const button = document.createElement('button');
            button.type = 'button';
            button.className = 'genre card';
            button.innerHTML = '<span class="emoji"></span><strong></strong><small></small>';
            button.querySelector('.emoji').textContent = genre.emoji;
            button.querySelector('strong').textContent = ' ' + genre.name;
            button.querySelector('small').textContent = genre.desc;
            button.addEventListener('click', () => pickGenre(genre.name));
            document.getElementById('genre-grid').appendChild(button);
        });

        moodInput.addEventListener('input', () => {
            moodSubmit.disabled = (state && state.mood_pending) || !moodInput.value.trim();
        });

        moodSubmit.addEventListener('click', async () => {
            const mood = moodInput.value.trim();
            if (!mood || (state && state.mood_pending)) {
                return;
            }
            notice.textContent = '';
            moodSubmit.disabled = true;
            moodSubmit.textContent = 'Analyzing Mood...';
            try {
                const next = await call('POST', '/api/pick/mood', { mood });
                moodInput.value = '';
                render(next);
            } catch (error) {
                window.alert(error.message);
                if (error.status === 503) {
                    await pickGenre(boot.fallbackGenre);
                }
            } finally {
                restoreMoodButton();
            }
        });

        extraActions.querySelectorAll('button').forEach((button) => {
            button.addEventListener('click', async () => {
                if (!state || state.extra_pending) {
                    return;
                }
                schedulePoll();
                await send('POST', '/api/extra/' + button.dataset.extra);
            });
        });

        trailerBtn.addEventListener('click', () => {
            if (state && state.trailer_url) {
                window.open(state.trailer_url, '_blank');
            }
        });

        replayBtn.addEventListener('click', async () => {
            if (await send('POST', '/api/replay')) {
                schedulePoll();
            }
        });

        askAgainBtn.addEventListener('click', async () => {
            await send('POST', '/api/reset');
            moodInput.focus();
        });

        document.getElementById('back').addEventListener('click', async () => {
            notice.textContent = '';
            await send('POST', '/api/reset');
        });

        call('GET', '/api/state').then((next) => {
            render(next);
            if (next.phase === 'animating') {
                schedulePoll();
            }
        });
    })();
</script>
</body>
</html>
"""
)


def render_app_page(settings: Settings, genres: Sequence[Genre]) -> str:
    """Return the full HTML for the single-page app."""

    boot = {
        "appName": settings.app_name,
        "fallbackGenre": settings.fallback_genre,
        "pollIntervalMs": max(settings.reveal_interval_ms, 40),
        "genres": [
            {
                "name": genre.name,
                "slug": genre.slug,
                "desc": genre.desc,
                "emoji": genre.emoji,
            }
            for genre in genres
        ],
    }
    boot_json = (
        json.dumps(boot)
        .replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("</", "<\\/")
    )

    page = APP_TEMPLATE
    replacements = {
        "__APP_NAME__": html.escape(settings.app_name),
        "__OPENROUTER_MODEL__": html.escape(settings.openrouter_model),
        "__BOOT_JSON__": boot_json,
    }
    for placeholder, value in replacements.items():
        page = page.replace(placeholder, value)
    return page
