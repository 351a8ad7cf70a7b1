"""Named pipeline profiles: the tunable constants of one pipeline variant."""

from dataclasses import dataclass, field

DEFAULT_PROFILE = "default"

PROMPT_TEMPLATE_V1 = """
Summarize the story into a stable diffusion prompt.
Be concise, less than 200 words.
The story: {story}
""".strip()

PROMPT_TEMPLATE_CINEMATIC_V1 = """
Summarize the story into a stable diffusion prompt for a single cinematic still.
Describe the setting, lighting and mood; mention the time of day if the story implies one.
Be concise, less than 200 words.
The story: {story}
""".strip()


@dataclass(frozen=True)
class ZoomCurve:
    """Zoom factor as a pure function of the output frame index.

    Grows linearly by ``step`` per frame from 1.0 and holds at ``max_zoom``.
    ``factor`` is the reference for the ffmpeg ``expression``.
    """

    step: float = 0.001
    max_zoom: float = 1.5

    def factor(self, frame_index: int) -> float:
        return min(1.0 + self.step * max(frame_index, 0), self.max_zoom)

    def expression(self) -> str:
        # ffmpeg zoompan expression; `on` is the output frame number.
        return f"min(1+{self.step:g}*on,{self.max_zoom:g})"


@dataclass(frozen=True)
class PipelineProfile:
    name: str
    text_model: str
    temperature: float
    prompt_template: str
    prompt_template_version: str
    stylization_engine: str
    image_strength: float
    cfg_scale: int
    clip_guidance_preset: str
    zoom: ZoomCurve = field(default_factory=ZoomCurve)

    def render_prompt(self, story: str) -> str:
        return self.prompt_template.format(story=story)


PROFILES: dict[str, PipelineProfile] = {
    "default": PipelineProfile(
        name="default",
        text_model="gemini-2.0-flash-exp",
        temperature=0.3,
        prompt_template=PROMPT_TEMPLATE_V1,
        prompt_template_version="v1",
        stylization_engine="stable-diffusion-v1-6",
        image_strength=0.55,
        cfg_scale=20,
        clip_guidance_preset="FAST_BLUE",
        zoom=ZoomCurve(step=0.001, max_zoom=1.5),
    ),
    "cinematic": PipelineProfile(
        name="cinematic",
        text_model="gemini-2.0-flash-exp",
        temperature=0.5,
        prompt_template=PROMPT_TEMPLATE_CINEMATIC_V1,
        prompt_template_version="cinematic-v1",
        stylization_engine="stable-diffusion-v1-6",
        image_strength=0.45,
        cfg_scale=15,
        clip_guidance_preset="SLOWEST",
        zoom=ZoomCurve(step=0.0005, max_zoom=1.3),
    ),
}
