"""Test HTML for AMP Hero Preload transformer validation.

Builders for server-side rendered AMP documents with hero images.
"""

VIEWPORT_META = '<meta name="viewport" content="width=device-width">'

SAMPLE_AMP_HTML = """
<!DOCTYPE html>
<html amp lang="en" i-amphtml-layout i-amphtml-no-boilerplate transformed="self;v=1">
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width">
    <title>Hero Test Page</title>
    <link rel="canonical" href="https://example.com/">
</head>
<body>
    <h1>Hero Image Preloading</h1>

    <!-- Responsive hero without media: skipped upstream -->
    <amp-img data-hero i-amphtml-ssr layout="responsive" width="1200" height="600"
             src="https://example.com/hero.jpg"
             srcset="https://example.com/hero-600.jpg 600w, https://example.com/hero-1200.jpg 1200w"
             sizes="(max-width: 600px) 600px, 1200px">
        <img class="i-amphtml-fill-content i-amphtml-replaced-content" decoding="async"
             src="https://example.com/hero.jpg"
             srcset="https://example.com/hero-600.jpg 600w, https://example.com/hero-1200.jpg 1200w"
             sizes="(max-width: 600px) 600px, 1200px">
    </amp-img>

    <!-- Not a hero -->
    <amp-img i-amphtml-ssr layout="fixed" width="100" height="100" src="https://example.com/logo.png">
        <img src="https://example.com/logo.png">
    </amp-img>
</body>
</html>
"""


def amp_page(body: str = "", head: str = VIEWPORT_META) -> str:
    """Build a minimal AMP page around the given head and body markup."""
    return (
        "<!DOCTYPE html>\n"
        '<html amp lang="en">\n'
        "<head>\n"
        '<meta charset="utf-8">\n'
        f"{head}\n"
        "<title>Test</title>\n"
        "</head>\n"
        "<body>\n"
        f"{body}\n"
        "</body>\n"
        "</html>\n"
    )


def hero_img(src: str, *, ssr: bool = True, loading: str | None = None, **attrs: str) -> str:
    """Build an amp-img hero element with a nested native img."""
    markers = "data-hero i-amphtml-ssr" if ssr else "data-hero"
    extra = "".join(f' {name}="{value}"' for name, value in attrs.items())
    loading_attr = f' loading="{loading}"' if loading is not None else ""
    return (
        f'<amp-img {markers} layout="responsive" width="400" height="300" src="{src}"{extra}>'
        f'<img src="{src}"{loading_attr}>'
        "</amp-img>"
    )
