"""
Pixel script rendering.
Produces the JavaScript served at /pixel.js for one app.
"""
import json
from string import Template
from typing import Optional, List, Dict, Any

from pixeltrack.core.config import settings
from pixeltrack.models.app import App
from pixeltrack.models.custom_event import CustomEvent

JS_CONTENT_TYPE = "application/javascript; charset=utf-8"

# Values are substituted as JSON literals, so storefront-supplied ids can't break out of the string
_PIXEL_TEMPLATE = Template("""\
(function() {
  'use strict';
  if (window.PixelAnalytics && window.PixelAnalytics.loaded) return;

  var APP_ID = $app_id;
  var SHOP_DOMAIN = $shop;
  var ENDPOINT = $endpoint;
  var CONFIG = $config;
  var CUSTOM_EVENTS = $custom_events;
  var SESSION_KEY = 'px_session_' + APP_ID;
  var VISITOR_KEY = 'px_visitor_' + APP_ID;

  function generateId() {
    return 'xxxxxxxx-xxxx-4xxx-yxxx-xxxxxxxxxxxx'.replace(/[xy]/g, function(c) {
      var r = Math.random() * 16 | 0, v = c === 'x' ? r : (r & 0x3 | 0x8);
      return v.toString(16);
    });
  }

  function stored(storage, key) {
    try {
      var value = storage.getItem(key);
      if (!value) { value = generateId(); storage.setItem(key, value); }
      return value;
    } catch (e) {
      return generateId();
    }
  }

  var sessionId = stored(window.sessionStorage, SESSION_KEY);
  var visitorId = stored(window.localStorage, VISITOR_KEY);

  function utm() {
    var params = new URLSearchParams(window.location.search);
    return {
      utmSource: params.get('utm_source'),
      utmMedium: params.get('utm_medium'),
      utmCampaign: params.get('utm_campaign'),
      utmTerm: params.get('utm_term'),
      utmContent: params.get('utm_content')
    };
  }

  function send(payload) {
    var body = JSON.stringify(payload);
    if (navigator.sendBeacon) {
      var blob = new Blob([body], { type: 'text/plain' });
      if (navigator.sendBeacon(ENDPOINT, blob)) return;
    }
    fetch(ENDPOINT, {
      method: 'POST',
      headers: { 'Content-Type': 'application/json' },
      body: body,
      keepalive: true,
      mode: 'cors'
    }).catch(function() {});
  }

  function track(eventName, properties) {
    var payload = {
      appId: APP_ID,
      eventName: eventName,
      url: window.location.href,
      referrer: document.referrer || null,
      pageTitle: document.title,
      sessionId: sessionId,
      visitorId: visitorId,
      fingerprint: visitorId,
      screenWidth: window.screen.width,
      screenHeight: window.screen.height,
      language: navigator.language,
      properties: properties || {}
    };
    var params = utm();
    for (var key in params) {
      if (params[key]) payload[key] = params[key];
    }
    if (properties) {
      ['value', 'currency', 'productId', 'productName', 'quantity'].forEach(function(field) {
        if (properties[field] !== undefined) payload[field] = properties[field];
      });
    }
    send(payload);
  }

  if (CONFIG.autoPageviews) {
    track('pageview');
  }

  if (CONFIG.autoClicks) {
    document.addEventListener('click', function(e) {
      var el = e.target.closest && e.target.closest('a, button');
      if (!el) return;
      track('click', {
        tag: el.tagName.toLowerCase(),
        text: (el.innerText || '').trim().slice(0, 100),
        href: el.getAttribute('href')
      });
    }, true);
  }

  if (CONFIG.autoScroll) {
    var marks = [25, 50, 75, 100];
    var reached = {};
    window.addEventListener('scroll', function() {
      var height = document.documentElement.scrollHeight - window.innerHeight;
      if (height <= 0) return;
      var depth = Math.round((window.scrollY / height) * 100);
      marks.forEach(function(mark) {
        if (depth >= mark && !reached[mark]) {
          reached[mark] = true;
          track('scroll', { depth: mark });
        }
      });
    }, { passive: true });
  }

  CUSTOM_EVENTS.forEach(function(ce) {
    document.addEventListener(ce.eventType || 'click', function(e) {
      var el = e.target.closest && e.target.closest(ce.selector);
      if (!el) return;
      var props = { selector: ce.selector, metaEventName: ce.meta };
      var productId = el.getAttribute('data-product-id');
      if (productId) props.productId = productId;
      track(ce.name, props);
    }, true);
  });

  window.PixelAnalytics = { loaded: true, track: track, appId: APP_ID, shop: SHOP_DOMAIN };
})();
""")

_NOT_FOUND_TEMPLATE = Template("""\
console.warn('[PixelAnalytics] App not found: ' + $app_id);
console.warn('[PixelAnalytics] Check the script tag in your theme and use a valid app ID.');
window.PixelAnalytics = { loaded: true, track: function() { console.warn('Tracking disabled - invalid app ID'); } };
""")


def _js(value: Any) -> str:
    """JSON literal safe to embed in a script (no closing tags)"""
    return json.dumps(value).replace("</", "<\\/")


def custom_event_config(custom_events: List[CustomEvent]) -> List[Dict[str, Any]]:
    """Active custom events that the pixel can bind by CSS selector"""
    return [
        {
            "name": ce.name,
            "selector": ce.selector,
            "eventType": ce.event_type,
            "meta": ce.meta_event_name,
        }
        for ce in custom_events
        if ce.selector and ce.is_active
    ]


def render_pixel_script(app: App, custom_events: List[CustomEvent], shop: Optional[str] = None) -> str:
    """
    Render the tracking script for an app.

    Args:
        app: The app whose public id the pixel reports under
        custom_events: Custom event definitions to auto-bind
        shop: Storefront domain passed by the script tag, informational
    """
    app_settings = app.settings
    config = {
        "autoPageviews": app_settings.auto_track_pageviews if app_settings else True,
        "autoClicks": app_settings.auto_track_clicks if app_settings else True,
        "autoScroll": app_settings.auto_track_scroll if app_settings else False,
    }
    return _PIXEL_TEMPLATE.substitute(
        app_id=_js(app.app_id),
        shop=_js(shop),
        endpoint=_js(settings.APP_URL.rstrip("/") + "/api/track"),
        config=_js(config),
        custom_events=_js(custom_event_config(custom_events)),
    )


def render_not_found_script(app_id: str) -> str:
    """Stub served for an unknown app id so the storefront page doesn't error"""
    return _NOT_FOUND_TEMPLATE.substitute(app_id=_js(app_id))
